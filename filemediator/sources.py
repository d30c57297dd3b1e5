"""
sources.py — Retrieval strategies: open a readable byte stream for a location.

One strategy per URI scheme:

    file   LocalFileSource   local filesystem
    ftp    FtpSource         ftplib, whole file buffered in memory
    sftp   SftpSource        paramiko SSH session + SFTP channel

Every strategy's open() is a context manager. Whatever session, channel or
file handle it acquires is closed when the with-block exits, and also when
acquisition fails part-way. Failures surface as SourceError subclasses only.
"""

from __future__ import annotations

import ftplib
import io
import logging
import re
from abc import ABC, abstractmethod
from contextlib import ExitStack, contextmanager
from dataclasses import dataclass
from typing import BinaryIO, Dict, Iterator, Optional
from urllib.parse import unquote, urlsplit
from urllib.request import url2pathname

import paramiko

from filemediator.config import ReadFileConfig
from filemediator.errors import (
    InvalidSourceUri,
    RemoteRetrievalFailed,
    SourceAccessDenied,
    SourceNotFound,
    UnsupportedSourceScheme,
)

logger = logging.getLogger("filemediator.sources")

# scheme://user:PASSWORD@ (scheme optional)
_USERINFO_PASSWORD = re.compile(r"(?P<user>^\s*(?:[A-Za-z][A-Za-z0-9+.\-]*://)?[^:/?#@]*:)[^@/?#]*@")


@dataclass(frozen=True)
class SourceLocation:
    """Where to read from. `name` is what error messages call the source."""
    name: str
    scheme: str
    path: str
    host: Optional[str] = None
    port: Optional[int] = None
    username: Optional[str] = None
    password: Optional[str] = None


class SourceStrategy(ABC):
    """Opens a byte stream for one URI scheme."""

    scheme: str = ""

    @abstractmethod
    def open(self, location: SourceLocation) -> Iterator[BinaryIO]:
        """Context manager yielding a binary stream positioned at the start."""


class LocalFileSource(SourceStrategy):
    scheme = "file"

    @contextmanager
    def open(self, location: SourceLocation) -> Iterator[BinaryIO]:
        try:
            handle = open(location.path, "rb")
        except FileNotFoundError as exc:
            raise SourceNotFound(f"File not found: {location.path}", location.name) from exc
        except PermissionError as exc:
            raise SourceAccessDenied(f"Permission denied: {location.path}", location.name) from exc
        except OSError as exc:
            raise SourceNotFound(f"Cannot open {location.path}: {exc.strerror or exc}", location.name) from exc

        with handle:
            yield handle


class FtpSource(SourceStrategy):
    """Plain FTP. The transfer completes and the session is closed before yielding."""

    scheme = "ftp"
    default_port = 21

    @contextmanager
    def open(self, location: SourceLocation) -> Iterator[BinaryIO]:
        buffer = io.BytesIO()
        ftp = ftplib.FTP()
        try:
            ftp.connect(location.host, location.port or self.default_port)
            ftp.login(location.username or "anonymous", location.password or "")
            ftp.retrbinary(f"RETR {location.path}", buffer.write)
        except (ftplib.Error, OSError, EOFError) as exc:
            raise RemoteRetrievalFailed(
                f"FTP retrieval from {location.host} failed: {exc}", location.name
            ) from exc
        finally:
            _close_ftp(ftp)

        buffer.seek(0)
        with buffer:
            yield buffer


def _close_ftp(ftp: ftplib.FTP) -> None:
    if ftp.sock is None:
        return
    try:
        ftp.quit()
    except (ftplib.Error, OSError, EOFError):
        ftp.close()


class SftpSource(SourceStrategy):
    """SFTP over a password-authenticated paramiko session.

    With verify_host_keys=False any host key is accepted. That mirrors legacy
    deployments that ran with StrictHostKeyChecking=no and must be opted into
    explicitly.
    """

    scheme = "sftp"
    default_port = 22

    def __init__(self, verify_host_keys: bool = True, known_hosts: str | None = None):
        self.verify_host_keys = verify_host_keys
        self.known_hosts = known_hosts

    def _make_client(self) -> paramiko.SSHClient:
        client = paramiko.SSHClient()
        if self.verify_host_keys:
            client.load_system_host_keys()
            if self.known_hosts:
                client.load_host_keys(self.known_hosts)
            client.set_missing_host_key_policy(paramiko.RejectPolicy())
        else:
            logger.warning("Accepting unverified SFTP host keys")
            client.set_missing_host_key_policy(paramiko.AutoAddPolicy())
        return client

    @contextmanager
    def open(self, location: SourceLocation) -> Iterator[BinaryIO]:
        if not location.username:
            raise RemoteRetrievalFailed("SFTP source URI has no username", location.name)

        with ExitStack() as resources:
            handle = self._acquire(location, resources)
            try:
                yield handle
            except (paramiko.SSHException, OSError, EOFError) as exc:
                raise RemoteRetrievalFailed(
                    f"SFTP transfer from {location.host} broke off: {exc}", location.name
                ) from exc

    def _acquire(self, location: SourceLocation, resources: ExitStack) -> BinaryIO:
        """Connect and open the remote file; every step registers its own close."""
        try:
            client = self._make_client()
            resources.callback(_close_quietly, client, "SSH session")
            client.connect(
                hostname=location.host,
                port=location.port or self.default_port,
                username=location.username,
                password=location.password,
                allow_agent=False,
                look_for_keys=False,
            )
            sftp = client.open_sftp()
            resources.callback(_close_quietly, sftp, "SFTP channel")
            handle = sftp.open(location.path, "rb")
            resources.callback(_close_quietly, handle, "remote file")
        except (paramiko.SSHException, OSError, EOFError) as exc:
            raise RemoteRetrievalFailed(
                f"SFTP retrieval from {location.host} failed: {exc}", location.name
            ) from exc
        return handle


def _close_quietly(resource, what: str) -> None:
    # A dropped connection fails on close too; the remaining resources must still be released
    try:
        resource.close()
    except (paramiko.SSHException, OSError, EOFError) as exc:
        logger.warning(f"Error closing {what}: {exc}")


# ============================================================================
# Resolution
# ============================================================================

def build_strategies(config: ReadFileConfig) -> Dict[str, SourceStrategy]:
    """Scheme → strategy table for one mediator."""
    strategies: list[SourceStrategy] = [
        LocalFileSource(),
        FtpSource(),
        SftpSource(config.verify_host_keys, config.known_hosts),
    ]
    return {s.scheme: s for s in strategies}


def parse_source_uri(literal: str, schemes: tuple[str, ...] = ("file", "ftp", "sftp")) -> SourceLocation:
    """Turn a fileName literal into a SourceLocation."""
    name = redact_password(literal)
    try:
        parts = urlsplit(literal.strip())
        port = parts.port
    except ValueError as exc:
        raise InvalidSourceUri(f"Malformed URI: {exc}", name) from exc

    scheme = parts.scheme.lower()
    if scheme not in schemes:
        raise UnsupportedSourceScheme(name, scheme or None)

    if scheme == "file":
        if parts.netloc not in ("", "localhost"):
            raise InvalidSourceUri(f"Unexpected host in file URI: {redact_password(parts.netloc)}", name)
        if not parts.path:
            raise InvalidSourceUri("File URI has no path", name)
        return SourceLocation(name=name, scheme=scheme, path=url2pathname(parts.path))

    if not parts.hostname:
        raise InvalidSourceUri(f"{scheme.upper()} URI has no host", name)
    if not parts.path or parts.path == "/":
        raise InvalidSourceUri(f"{scheme.upper()} URI has no file path", name)

    return SourceLocation(
        name=name,
        scheme=scheme,
        path=unquote(parts.path),
        host=parts.hostname,
        port=port,
        username=unquote(parts.username) if parts.username is not None else None,
        password=unquote(parts.password) if parts.password is not None else None,
    )


def redact_password(literal: str) -> str:
    """Outcome strings end up on the message; keep passwords out of them.

    Works on the raw text, so it also applies to literals urlsplit rejects.
    """
    return _USERINFO_PASSWORD.sub(r"\g<user>***@", literal, count=1)


def location_for_path(path: str) -> SourceLocation:
    """Local path read from a message property."""
    return SourceLocation(name=path, scheme="file", path=path)
