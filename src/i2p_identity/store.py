"""On-disk store of router identities, sharded by the first character of the key."""

from __future__ import annotations

import os
import tempfile
from pathlib import Path

import structlog

from i2p_identity.core import keys_and_cert_from_bytes, keys_and_cert_to_bytes
from i2p_identity.errors import CodecError
from i2p_identity.models import KeysAndCert

logger = structlog.get_logger()

_SUFFIX = ".dat"


class IdentityStore:
    """Directory-backed map of key -> :class:`KeysAndCert`.

    Each identity is written in its wire encoding to
    ``<data_dir>/<app>/<kind>/<key[0]>/<key>.dat``.  Records that cannot be
    read or decoded are skipped by :meth:`load` so one corrupt file cannot hide the
    rest of the store.
    """

    def __init__(
        self,
        data_dir: str | Path,
        app: str = "i2p-identity",
        kind: str = "router-identity",
    ) -> None:
        self._directory = Path(data_dir) / app / kind
        if self._directory.exists() and not self._directory.is_dir():
            raise ValueError(
                f"Path {self._directory} exists but is not a directory"
            )
        self._directory.mkdir(parents=True, exist_ok=True)

    @property
    def directory(self) -> Path:
        return self._directory

    # ------------------------------------------------------------------
    # CRUD
    # ------------------------------------------------------------------

    def store(self, key: str, identity: KeysAndCert) -> Path:
        """Write *identity* under *key*, replacing any previous record."""
        path = self._path_for(key)
        path.parent.mkdir(parents=True, exist_ok=True)
        _atomic_write(path, keys_and_cert_to_bytes(identity))
        logger.debug("identity_stored", key=key, path=str(path))
        return path

    def get(self, key: str) -> KeysAndCert | None:
        """Return the identity stored under *key*, or None.

        Raises:
            CodecError: if the record exists but cannot be decoded.
        """
        path = self._path_for(key)
        if not path.is_file():
            return None
        return keys_and_cert_from_bytes(path.read_bytes())

    def remove(self, key: str) -> None:
        """Delete the record for *key*.

        Raises:
            KeyError: if no record exists for *key*.
        """
        path = self._path_for(key)
        if not path.is_file():
            raise KeyError(f"Identity not found: {key}")
        path.unlink()
        logger.debug("identity_removed", key=key)

    def keys(self) -> list[str]:
        """Return every stored key, sorted."""
        return sorted(path.stem for path in self._record_paths())

    def load(self) -> dict[str, KeysAndCert]:
        """Decode every record in the store, skipping corrupt ones."""
        identities: dict[str, KeysAndCert] = {}
        for path in self._record_paths():
            try:
                identities[path.stem] = keys_and_cert_from_bytes(path.read_bytes())
            except (CodecError, OSError) as exc:
                logger.warning(
                    "identity_record_skipped",
                    path=str(path),
                    error=str(exc),
                    error_type=type(exc).__name__,
                )
        logger.info("identities_loaded", count=len(identities))
        return identities

    # ------------------------------------------------------------------
    # Paths
    # ------------------------------------------------------------------

    def _path_for(self, key: str) -> Path:
        if not key or "/" in key or "\\" in key or key.startswith("."):
            raise ValueError(f"Invalid identity key: {key!r}")
        return self._directory / key[0] / f"{key}{_SUFFIX}"

    def _record_paths(self) -> list[Path]:
        # Only records sitting in the shard named after their first character
        # are addressable by key.
        return sorted(
            path
            for path in self._directory.glob(f"*/*{_SUFFIX}")
            if path.is_file()
            and not path.stem.startswith(".")
            and path.parent.name == path.stem[:1]
        )


def _atomic_write(path: Path, data: bytes) -> None:
    """Write *data* to *path* through a synced temporary file in the same directory."""
    fd, tmp = tempfile.mkstemp(prefix=".tmp.", dir=path.parent)
    try:
        with os.fdopen(fd, "wb") as fh:
            fh.write(data)
            fh.flush()
            os.fsync(fh.fileno())
        os.replace(tmp, path)
    finally:
        if os.path.exists(tmp):
            os.unlink(tmp)


__all__ = ["IdentityStore"]
