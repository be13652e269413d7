"""Share client implementations.

The SMB and SFTP clients import their libraries on first use, so both are
importable without the ``smb`` or ``sftp`` extras installed.
"""

from share_transfer.clients._local import LocalShareClient
from share_transfer.clients._sftp import HostKeyPolicy, SFTPShareClient
from share_transfer.clients._smb import SMBShareClient

__all__ = ["HostKeyPolicy", "LocalShareClient", "SFTPShareClient", "SMBShareClient"]
