"""
file-mediator
=============
Read-file mediation step: splice local, FTP or SFTP file content into a
SOAP message body.
"""

from filemediator.config import ConfigLoader, ReadFileConfig
from filemediator.mediator import ReadFileMediator
from filemediator.message_context import MessageContext, build_envelope
from filemediator.steps import OK, READ_FILE_RESPONSE


__all__ = [
    "ConfigLoader",
    "ReadFileConfig",
    "ReadFileMediator",
    "MessageContext",
    "build_envelope",
    "OK",
    "READ_FILE_RESPONSE",
]

__version__ = "0.1.0"
