"""The live workspace: current files, open tabs and preview revision.

``Workspace`` is the caller the FileStore and compositor are written for. It
applies one operation at a time, keeps the tab selection consistent with the
store, persists the new snapshot after every change and hands out preview
documents tagged with the revision token.
"""

import asyncio

from loguru import logger

from devspace.schemas.preview import CompositionReport, PreviewDocument
from devspace.services import preview_service
from devspace.services.file_store import FileNotFoundInStoreError, FileStore
from devspace.services.snapshot_store import SnapshotStore
from devspace.templates.init_project import ENTRY_FILE, SCRIPT_FILE, STYLESHEET_FILE


class OpenSelection:
    """Ordered open tabs plus the active file name."""

    def __init__(self, open_files: list[str] | None = None, active: str = ENTRY_FILE, entry: str | None = None) -> None:
        self.open_files: list[str] = list(dict.fromkeys(open_files or [active]))
        self.active = active
        self.entry = entry or active

    def open(self, name: str) -> None:
        self.open_files = [name] + [f for f in self.open_files if f != name]
        self.active = name

    def append(self, name: str) -> None:
        if name not in self.open_files:
            self.open_files.append(name)
        self.active = name

    def activate(self, name: str) -> None:
        """Switch to an already-open tab; names without a tab are ignored."""
        if name in self.open_files:
            self.active = name

    def close(self, name: str, files: FileStore) -> None:
        if name not in self.open_files:
            return
        self.open_files.remove(name)
        if self.active == name:
            self.active = self.open_files[0] if self.open_files else self._fallback(files)

    def renamed(self, old_name: str, new_name: str) -> None:
        self.open_files = [new_name if f == old_name else f for f in self.open_files]
        if self.active == old_name:
            self.active = new_name

    def deleted(self, name: str, files: FileStore) -> None:
        self.open_files = [f for f in self.open_files if f != name]
        if self.active == name:
            self.active = self._fallback(files)

    def _fallback(self, files: FileStore) -> str:
        names = files.names()
        return names[0] if names else self.entry


class Workspace:
    def __init__(
        self,
        files: FileStore,
        snapshot_store: SnapshotStore,
        *,
        entry: str = ENTRY_FILE,
        stylesheet: str = STYLESHEET_FILE,
        script: str = SCRIPT_FILE,
    ) -> None:
        self.files = files
        self.snapshot_store = snapshot_store
        self.selection = OpenSelection(active=entry, entry=entry)
        self.revision = 0
        self._canonical = {"entry": entry, "stylesheet": stylesheet, "script": script}
        self._lock = asyncio.Lock()

    @classmethod
    async def open(cls, snapshot_store: SnapshotStore, **canonical: str) -> "Workspace":
        """Build a workspace from the last saved snapshot, or the baseline."""
        try:
            persisted = await snapshot_store.load()
        except Exception as e:
            logger.warning("Could not read saved workspace, starting from template: {}", e)
            persisted = None
        files = FileStore.load(persisted)
        logger.info("Workspace opened with {} files", len(files))
        return cls(files, snapshot_store, **canonical)

    # -- Queries ---------------------------------------------------------------

    def exists(self, name: str) -> bool:
        return name in self.files

    def read(self, name: str) -> str:
        return self.files[name]

    def preview(self) -> PreviewDocument:
        return preview_service.render(self.files, self.revision, **self._canonical)

    def report(self) -> CompositionReport:
        return preview_service.inspect(self.files, **self._canonical)

    # -- File operations -------------------------------------------------------

    async def create_file(self, name: str) -> FileStore:
        async with self._lock:
            self.files = self.files.create(name)
            self.selection.append(name)
            logger.debug("Created {}", name)
            await self._persist()
            return self.files

    async def rename_file(self, old_name: str, new_name: str) -> FileStore:
        async with self._lock:
            files = self.files.rename(old_name, new_name)
            if files is self.files:
                return files
            self.files = files
            self.selection.renamed(old_name, new_name)
            logger.debug("Renamed {} -> {}", old_name, new_name)
            await self._persist()
            return self.files

    async def delete_file(self, name: str) -> FileStore:
        async with self._lock:
            files = self.files.delete(name)
            if files is self.files:
                return files
            self.files = files
            self.selection.deleted(name, files)
            logger.debug("Deleted {}", name)
            await self._persist()
            return self.files

    async def update_file(self, name: str, content: str) -> FileStore:
        async with self._lock:
            self.files = self.files.update(name, content)
            logger.debug("Updated {} ({} chars)", name, len(content))
            await self._persist()
            return self.files

    # -- Selection -------------------------------------------------------------

    def open_file(self, name: str) -> OpenSelection:
        self._require(name)
        self.selection.open(name)
        return self.selection

    def activate(self, name: str) -> OpenSelection:
        self._require(name)
        self.selection.activate(name)
        return self.selection

    def close_tab(self, name: str) -> OpenSelection:
        self.selection.close(name, self.files)
        return self.selection

    # -- Run / reset -----------------------------------------------------------

    def run(self) -> PreviewDocument:
        self.revision += 1
        logger.debug("Run: preview revision {}", self.revision)
        return self.preview()

    async def reset(self) -> FileStore:
        """Discard every change and return to the baseline template."""
        async with self._lock:
            self.files = FileStore.baseline()
            self.selection = OpenSelection(active=self._canonical["entry"], entry=self._canonical["entry"])
            self.revision += 1
            logger.info("Workspace reset to template (revision {})", self.revision)
            await self._persist()
            return self.files

    # -- Internals -------------------------------------------------------------

    def _require(self, name: str) -> None:
        if name not in self.files:
            raise FileNotFoundInStoreError(name)

    async def _persist(self) -> None:
        try:
            await self.snapshot_store.save(self.files.snapshot())
        except Exception as e:
            logger.warning("Dropped workspace snapshot write: {}", e)
