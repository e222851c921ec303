"""Link registry: the single owner of the code -> target mapping."""

import asyncio
import logging
from typing import Any, Awaitable, Dict, Iterable, List, Optional, TypeVar

from .shortcode import ShortCodeGenerator
from .storage.base import LinkStoreBase
from .storage.json_file import JsonFileStore
from .models import LinkEntry
from .errors import (
    InvalidTarget,
    InvalidCode,
    CodeConflict,
    NotFound,
    GenerationExhausted,
)
from .common.validators import is_valid_url, is_valid_short_code

T = TypeVar("T")


class LinkRegistry:
    """Create, look up, delete and list short links.

    Mutations (create, delete, reload) hold one asyncio lock across the whole
    load -> modify -> persist cycle and always start from the state on disk.
    Reads are served from an in-memory copy that is swapped, never edited,
    after each successful commit, so a reader sees either the state before or
    after a mutation and never a partial one.
    """

    def __init__(
        self,
        store: LinkStoreBase,
        short_code_generator: Optional[ShortCodeGenerator] = None,
        logger: Optional[logging.Logger] = None,
        enable_custom_codes: bool = True,
        max_generation_retries: int = 5,
        max_code_length: int = 64,
        allowed_schemes: Iterable[str] = ("http", "https"),
    ):
        """Initialize link registry.

        Args:
            store: Durable store for the mapping
            short_code_generator: Optional short code generator
            logger: Optional logger
            enable_custom_codes: Whether callers may choose their own codes
            max_generation_retries: Attempts at finding a free generated code
            max_code_length: Longest accepted custom code
            allowed_schemes: URL schemes accepted for targets
        """
        self.store = store
        self.generator = short_code_generator or ShortCodeGenerator()
        self.logger = logger or logging.getLogger(__name__)
        self.enable_custom_codes = enable_custom_codes
        self.max_generation_retries = max(1, max_generation_retries)
        self.max_code_length = max_code_length
        self.allowed_schemes = tuple(allowed_schemes)

        self._lock = asyncio.Lock()
        self._links: Optional[Dict[str, str]] = None

    async def create(self, target: str, requested_code: Optional[str] = None) -> str:
        """Register a new link.

        Args:
            target: Destination URL
            requested_code: Optional caller-chosen code; blank means generate one

        Returns:
            The code the link was stored under

        Raises:
            InvalidTarget: If the target is empty or not a valid URL
            InvalidCode: If the requested code is malformed or custom codes are off
            CodeConflict: If the requested code already exists
            GenerationExhausted: If no free code was found within the retry bound
            StorageFailure: If the data file could not be read or written
        """
        is_valid, error = is_valid_url(target, self.allowed_schemes)
        if not is_valid:
            raise InvalidTarget(f"Invalid URL: {error}")

        code = (requested_code or "").strip()
        if code:
            if not self.enable_custom_codes:
                raise InvalidCode("Custom short codes are not enabled")
            is_valid, error = is_valid_short_code(code, max_length=self.max_code_length)
            if not is_valid:
                raise InvalidCode(f"Invalid short code: {error}")

        # Mutations run to completion even if the caller is cancelled,
        # keeping memory and disk in step.
        return await self._run_to_completion(self._create_locked(target, code or None))

    async def lookup(self, code: str) -> Optional[str]:
        """Get the target for a code.

        Args:
            code: The short code to look up

        Returns:
            Target URL or None if not found
        """
        links = await self._current()
        target = links.get(code)
        if target is None:
            self.logger.debug(f"Short code not found: {code}")
        return target

    async def delete(self, code: str) -> None:
        """Remove a link permanently.

        Args:
            code: The short code to delete

        Raises:
            NotFound: If the code does not exist
            StorageFailure: If the data file could not be read or written
        """
        await self._run_to_completion(self._delete_locked(code))

    async def list_all(self) -> Dict[str, str]:
        """Get a snapshot of every link.

        Returns:
            A copy of the code -> target mapping
        """
        return dict(await self._current())

    async def list_entries(self) -> List[LinkEntry]:
        """Get every link as entries sorted by code."""
        links = await self._current()
        return [LinkEntry(code, target) for code, target in sorted(links.items())]

    async def reload(self) -> int:
        """Re-read the data file, picking up hand edits.

        Returns:
            Number of links now known
        """
        async with self._lock:
            links = await self._load()
        self.logger.info(f"Reloaded {len(links)} links from {self.store.location}")
        return len(links)

    async def health_check(self) -> Dict[str, Any]:
        """Perform health check.

        Returns:
            Dictionary with storage status and link count
        """
        storage_healthy = await asyncio.to_thread(self.store.health_check)
        links = self._links
        return {
            "storage": storage_healthy,
            "links": len(links) if links is not None else None,
            "overall": storage_healthy,
        }

    async def _create_locked(self, target: str, code: Optional[str]) -> str:
        async with self._lock:
            links = await self._load()

            if code is not None:
                if code in links:
                    raise CodeConflict(
                        f"Short code '{code}' already exists",
                        details={"shortCode": code},
                    )
            else:
                code = self._generate_unique_code(links)

            updated = dict(links)
            updated[code] = target
            await self._commit(updated)

        self.logger.info(f"Created short link: {code} -> {target}")
        return code

    async def _delete_locked(self, code: str) -> None:
        async with self._lock:
            links = await self._load()

            if code not in links:
                raise NotFound(f"Short code '{code}' not found", details={"shortCode": code})

            updated = {k: v for k, v in links.items() if k != code}
            await self._commit(updated)

        self.logger.info(f"Deleted short link: {code}")

    async def _run_to_completion(self, coro: Awaitable[T]) -> T:
        """Run coro in its own task that survives cancellation of the caller."""
        task = asyncio.ensure_future(coro)
        task.add_done_callback(self._log_abandoned_failure)
        return await asyncio.shield(task)

    def _log_abandoned_failure(self, task: asyncio.Future) -> None:
        # Retrieving the exception here keeps a cancelled caller's failure
        # from surfacing as "Task exception was never retrieved".
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            self.logger.debug(f"Mutation finished with {type(exc).__name__}: {exc}")

    async def _current(self) -> Dict[str, str]:
        """Return the in-memory mapping, loading it on first use."""
        links = self._links
        if links is None:
            async with self._lock:
                if self._links is None:
                    await self._load()
                links = self._links
        return links

    async def _load(self) -> Dict[str, str]:
        """Read the file; caller must hold the lock."""
        links = await asyncio.to_thread(self.store.load)
        self._links = links
        return links

    async def _commit(self, links: Dict[str, str]) -> None:
        """Persist, then publish to readers; caller must hold the lock."""
        await asyncio.to_thread(self.store.save, links)
        self._links = links

    def _generate_unique_code(self, links: Dict[str, str]) -> str:
        """Generate a code not present in links.

        Raises:
            GenerationExhausted: If every attempt collided
        """
        for attempt in range(self.max_generation_retries):
            code = self.generator.generate_random()
            if code not in links:
                if attempt:
                    self.logger.debug(f"Generated code after {attempt + 1} attempts: {code}")
                return code
            self.logger.warning(f"Generated code collided: {code}")

        raise GenerationExhausted(
            f"Unable to generate unique short code after {self.max_generation_retries} attempts",
            details={"attempts": self.max_generation_retries},
        )


def build_registry(config, logger: logging.Logger) -> LinkRegistry:
    """Wire the store, generator and registry from a ``Config``.

    Shared by the web server and the CLI so both enforce the same policy.
    """
    store = JsonFileStore(
        config.data_file,
        reset_on_corrupt=config.reset_on_corrupt,
        logger=logger.getChild("storage"),
    )
    generator = ShortCodeGenerator(default_length=config.short_code_length)
    return LinkRegistry(
        store=store,
        short_code_generator=generator,
        logger=logger.getChild("registry"),
        enable_custom_codes=config.enable_custom_codes,
        max_generation_retries=config.max_generation_retries,
        max_code_length=config.max_code_length,
        allowed_schemes=config.scheme_list,
    )
