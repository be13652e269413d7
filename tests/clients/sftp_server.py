"""In-process SFTP server for testing, serving a local temp directory.

Runs paramiko's server side in background threads and accepts any login.
Folder and open semantics follow a plain OpenSSH server: ``mkdir`` is not
recursive and ``open`` does not create missing parents.
"""

from __future__ import annotations

import contextlib
import os
import socket
import threading
from pathlib import Path, PurePosixPath

import paramiko
from paramiko import (
    AUTH_SUCCESSFUL,
    OPEN_SUCCEEDED,
    RSAKey,
    ServerInterface,
    SFTPAttributes,
    SFTPHandle,
    SFTPServer,
    SFTPServerInterface,
    Transport,
)


class AcceptAllServer(ServerInterface):
    """SSH server side that lets every user in."""

    def check_auth_password(self, username: str, password: str) -> int:
        return AUTH_SUCCESSFUL

    def get_allowed_auths(self, username: str) -> str:
        return "password"

    def check_channel_request(self, kind: str, chanid: int) -> int:
        return OPEN_SUCCEEDED


class LocalHandle(SFTPHandle):
    """Handle over a real local file object."""

    def stat(self) -> SFTPAttributes | int:
        try:
            return SFTPAttributes.from_stat(os.fstat(self.readfile.fileno()))
        except OSError as exc:
            return SFTPServer.convert_errno(exc.errno)

    def chattr(self, attr: SFTPAttributes) -> int:
        return paramiko.SFTP_OK


def _errno_result(exc: OSError) -> int:
    return SFTPServer.convert_errno(exc.errno)


class LocalSFTPServer(SFTPServerInterface):
    """Maps SFTP requests onto the directory in ``ROOT``."""

    ROOT: str = ""

    def _local(self, path: str) -> str:
        rel = str(PurePosixPath("/") / path).lstrip("/")
        return str(Path(self.ROOT) / rel)

    def canonicalize(self, path: str) -> str:
        return str(PurePosixPath("/") / path)

    def list_folder(self, path: str) -> list[SFTPAttributes] | int:
        local = self._local(path)
        try:
            entries = []
            for name in os.listdir(local):
                attr = SFTPAttributes.from_stat(os.stat(os.path.join(local, name)))
                attr.filename = name
                entries.append(attr)
            return entries
        except OSError as exc:
            return _errno_result(exc)

    def stat(self, path: str) -> SFTPAttributes | int:
        try:
            return SFTPAttributes.from_stat(os.stat(self._local(path)))
        except OSError as exc:
            return _errno_result(exc)

    lstat = stat

    def open(self, path: str, flags: int, attr: SFTPAttributes) -> SFTPHandle | int:
        try:
            fd = os.open(self._local(path), flags, 0o644)
        except OSError as exc:
            return _errno_result(exc)
        if flags & os.O_WRONLY:
            mode = "wb"
        elif flags & os.O_RDWR:
            mode = "rb+"
        else:
            mode = "rb"
        fobj = os.fdopen(fd, mode)
        handle = LocalHandle(flags)
        handle.filename = self._local(path)
        handle.readfile = fobj
        handle.writefile = fobj
        return handle

    def remove(self, path: str) -> int:
        try:
            os.remove(self._local(path))
        except OSError as exc:
            return _errno_result(exc)
        return paramiko.SFTP_OK

    def rename(self, oldpath: str, newpath: str) -> int:
        new = self._local(newpath)
        if os.path.exists(new):
            return paramiko.SFTP_FAILURE
        try:
            os.rename(self._local(oldpath), new)
        except OSError as exc:
            return _errno_result(exc)
        return paramiko.SFTP_OK

    def posix_rename(self, oldpath: str, newpath: str) -> int:
        try:
            os.replace(self._local(oldpath), self._local(newpath))
        except OSError as exc:
            return _errno_result(exc)
        return paramiko.SFTP_OK

    def mkdir(self, path: str, attr: SFTPAttributes) -> int:
        try:
            os.mkdir(self._local(path))
        except FileExistsError:
            # OpenSSH answers an existing folder with a generic failure.
            return paramiko.SFTP_FAILURE
        except OSError as exc:
            return _errno_result(exc)
        return paramiko.SFTP_OK

    def rmdir(self, path: str) -> int:
        try:
            os.rmdir(self._local(path))
        except OSError as exc:
            return _errno_result(exc)
        return paramiko.SFTP_OK

    def chattr(self, path: str, attr: SFTPAttributes) -> int:
        return paramiko.SFTP_OK


def _serve(server_socket: socket.socket, host_key: RSAKey, stop_event: threading.Event) -> None:
    server_socket.settimeout(0.5)
    while not stop_event.is_set():
        try:
            conn, _addr = server_socket.accept()
        except TimeoutError:
            continue
        except OSError:
            break

        transport = Transport(conn)
        transport.add_server_key(host_key)
        transport.set_subsystem_handler("sftp", SFTPServer, LocalSFTPServer)
        try:
            transport.start_server(server=AcceptAllServer())
        except Exception:
            transport.close()


def start_sftp_server(
    root: str,
    host: str = "127.0.0.1",
    port: int = 0,
) -> tuple[threading.Thread, int, RSAKey, threading.Event, socket.socket]:
    """Serve ``root`` over SFTP from a daemon thread.

    Returns ``(thread, port, host_key, stop_event, server_socket)``.
    """
    os.makedirs(root, exist_ok=True)
    LocalSFTPServer.ROOT = root
    host_key = RSAKey.generate(2048)

    server_socket = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    server_socket.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
    server_socket.bind((host, port))
    server_socket.listen(5)
    actual_port = server_socket.getsockname()[1]

    stop_event = threading.Event()
    thread = threading.Thread(target=_serve, args=(server_socket, host_key, stop_event), daemon=True)
    thread.start()
    return thread, actual_port, host_key, stop_event, server_socket


def stop_sftp_server(thread: threading.Thread, stop_event: threading.Event, server_socket: socket.socket) -> None:
    """Stop the accept loop and release the socket."""
    stop_event.set()
    with contextlib.suppress(OSError):
        server_socket.close()
    thread.join(timeout=5)
