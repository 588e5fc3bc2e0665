"""Object storage filesystem binding.

Object keys are treated as paths and ``/``-delimited prefixes as
directories. Reads fetch byte ranges on demand so a split only
downloads the bytes it covers (plus one straddling line).
"""

from __future__ import annotations

import io
from typing import TYPE_CHECKING, BinaryIO

from symlink_input.core.domain.types import BlockLocation, FileStatus

if TYPE_CHECKING:
    from symlink_input.io.oci_client import OCIObjectStorageClient


class ObjectStorageFileSystem:
    """FileSystem implementation over a single object storage bucket."""

    DEFAULT_READ_BUFFER = 1024 * 1024

    def __init__(
        self,
        *,
        client: OCIObjectStorageClient,
        bucket: str,
        read_buffer_bytes: int = DEFAULT_READ_BUFFER,
    ) -> None:
        self._client = client
        self._bucket = bucket
        self._read_buffer_bytes = read_buffer_bytes

    # ------------------------------------------------------------------

    def list(self, path: str) -> list[FileStatus]:
        status = self.stat(path)
        if not status.is_dir:
            return [status]

        prefix = self._key(path)
        prefix = f"{prefix}/" if prefix else ""

        entries: list[FileStatus] = []
        token: str | None = None

        while True:
            resp = self._client.list_objects(
                bucket=self._bucket,
                prefix=prefix,
                delimiter="/",
                continuation_token=token,
            )

            for obj in resp["Contents"]:
                key = obj["Key"]
                # Zero-byte "folder" marker objects
                if key.endswith("/"):
                    continue
                entries.append(self._file_status(key, int(obj["Size"] or 0)))

            for sub_prefix in resp["CommonPrefixes"]:
                entries.append(
                    FileStatus(path=sub_prefix.rstrip("/"), length=0, is_dir=True)
                )

            token = resp["NextContinuationToken"]
            if not resp["IsTruncated"]:
                break

        return sorted(entries, key=lambda entry: entry.path)

    def stat(self, path: str) -> FileStatus:
        key = self._key(path)

        if key:
            try:
                head = self._client.head_object(bucket=self._bucket, key=key)
            except FileNotFoundError:
                pass
            else:
                return self._file_status(key, int(head["ContentLength"]))

        prefix = f"{key}/" if key else ""
        resp = self._client.list_objects(
            bucket=self._bucket,
            prefix=prefix,
            max_keys=1,
        )

        if key and not resp["Contents"]:
            raise FileNotFoundError(f"{self._bucket}/{key}")

        return FileStatus(path=key, length=0, is_dir=True)

    def open_read(self, path: str) -> BinaryIO:
        key = self._key(path)
        length = int(self._client.head_object(bucket=self._bucket, key=key)["ContentLength"])

        raw = _RangedObjectReader(
            client=self._client,
            bucket=self._bucket,
            key=key,
            length=length,
        )
        return io.BufferedReader(raw, buffer_size=self._read_buffer_bytes)

    def open_write(self, path: str) -> BinaryIO:
        return _ObjectUploadBuffer(
            client=self._client,
            bucket=self._bucket,
            key=self._key(path),
        )

    # ------------------------------------------------------------------

    @staticmethod
    def _key(path: str) -> str:
        return path.strip("/")

    @staticmethod
    def _file_status(key: str, length: int) -> FileStatus:
        blocks = (BlockLocation(offset=0, length=length),) if length else ()
        return FileStatus(
            path=key,
            length=length,
            is_dir=False,
            block_size=length,
            blocks=blocks,
        )


class _RangedObjectReader(io.RawIOBase):
    """Seekable raw stream that issues one ranged GET per read."""

    def __init__(
        self,
        *,
        client: OCIObjectStorageClient,
        bucket: str,
        key: str,
        length: int,
    ) -> None:
        super().__init__()
        self._client = client
        self._bucket = bucket
        self._key = key
        self._length = length
        self._pos = 0

    def readable(self) -> bool:
        return True

    def seekable(self) -> bool:
        return True

    def tell(self) -> int:
        return self._pos

    def seek(self, offset: int, whence: int = io.SEEK_SET) -> int:
        if whence == io.SEEK_SET:
            pos = offset
        elif whence == io.SEEK_CUR:
            pos = self._pos + offset
        elif whence == io.SEEK_END:
            pos = self._length + offset
        else:
            raise ValueError(f"Invalid whence: {whence}")

        if pos < 0:
            raise ValueError(f"Negative seek position: {pos}")

        self._pos = pos
        return pos

    def readinto(self, buffer) -> int:
        if self._pos >= self._length:
            return 0

        count = min(len(buffer), self._length - self._pos)
        if count == 0:
            return 0

        resp = self._client.get_object(
            bucket=self._bucket,
            key=self._key,
            byte_range=(self._pos, self._pos + count - 1),
        )
        data = resp["Body"].read()

        buffer[: len(data)] = data
        self._pos += len(data)
        return len(data)


class _ObjectUploadBuffer(io.BytesIO):
    """In-memory write buffer uploaded as one object on close."""

    def __init__(
        self,
        *,
        client: OCIObjectStorageClient,
        bucket: str,
        key: str,
    ) -> None:
        super().__init__()
        self._client = client
        self._bucket = bucket
        self._key = key

    def close(self) -> None:
        if self.closed:
            return
        self._client.put_object(
            bucket=self._bucket,
            key=self._key,
            body=self.getvalue(),
        )
        super().close()
