"""Upstream release checks.

Compares the running version with the latest release published on the
upstream GitHub repository and fetches recent release notes. The latest
release is cached for a configurable TTL to stay well inside GitHub's
unauthenticated rate limit (60 requests/hour).
"""

import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Generic, Literal, TypeVar

import httpx
import semver

from slatestack.core.config import Settings
from slatestack.core.logging import get_logger
from slatestack.domain.exceptions import UpstreamRateLimitedError, UpstreamUnavailableError

logger = get_logger(__name__)

T = TypeVar("T")

VersionDiff = Literal["major", "minor", "patch"]


class ReleaseCache(Generic[T]):
    """Single-value cache that expires ``ttl_seconds`` after it was set.

    Args:
        ttl_seconds: Lifetime of a cached value.
        clock: Monotonic time source in seconds.
    """

    def __init__(self, ttl_seconds: float, clock: Callable[[], float] = time.monotonic) -> None:
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._value: T | None = None
        self._stored_at: float | None = None

    def get(self) -> T | None:
        if self._stored_at is None:
            return None
        if self._clock() - self._stored_at >= self.ttl_seconds:
            self.clear()
            return None
        return self._value

    def set(self, value: T) -> None:
        self._value = value
        self._stored_at = self._clock()

    def clear(self) -> None:
        self._value = None
        self._stored_at = None


@dataclass(frozen=True)
class UpdateCheckResult:
    current_version: str
    latest_version: str
    update_available: bool
    version_diff: VersionDiff | None
    release_url: str
    published_at: str


@dataclass(frozen=True)
class ReleaseNote:
    version: str
    name: str
    body: str
    published_at: str
    url: str


def clean_version(version: str | None) -> semver.Version | None:
    """Parse a ``v1.2.3``-style tag.

    Prerelease tags are kept and build metadata is dropped.
    """
    text = (version or "").strip().lstrip("=v").strip()
    try:
        return semver.Version.parse(text).replace(build=None)
    except ValueError:
        return None


def version_diff(current: semver.Version, latest: semver.Version) -> VersionDiff | None:
    """Classify how far ``latest`` is ahead of ``current``.

    ``None`` when ``latest`` is not newer, or when only the prerelease part
    differs (``1.2.3-beta.1`` -> ``1.2.3``).
    """
    if latest <= current:
        return None
    if latest.major > current.major:
        return "major"
    if latest.minor > current.minor:
        return "minor"
    if latest.patch > current.patch:
        return "patch"
    return None


class UpdateService:
    """Checks the upstream repository for newer releases.

    Args:
        current_version: Version of the running application.
        owner: Upstream repository owner.
        repo: Upstream repository name.
        cache: Cache for the latest release payload.
        api_url: GitHub API base URL.
        timeout: Timeout in seconds for each upstream request.
        transport: Optional httpx transport (used by tests).
    """

    USER_AGENT = "Slatestack-Update-Checker"

    def __init__(
        self,
        current_version: str,
        owner: str,
        repo: str,
        cache: ReleaseCache[dict[str, Any]] | None = None,
        api_url: str = "https://api.github.com",
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.current_version = current_version
        self.owner = owner
        self.repo = repo
        self.cache = cache if cache is not None else ReleaseCache(15 * 60)
        self.api_url = api_url.rstrip("/")
        self.timeout = timeout
        self.transport = transport

    @classmethod
    def from_settings(cls, settings: Settings, cache: ReleaseCache[dict[str, Any]]) -> "UpdateService":
        return cls(
            current_version=settings.app_version,
            owner=settings.update_repo_owner,
            repo=settings.update_repo_name,
            cache=cache,
            api_url=settings.update_api_url,
            timeout=settings.update_timeout_seconds,
        )

    @property
    def headers(self) -> dict[str, str]:
        return {
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": "2022-11-28",
            "User-Agent": self.USER_AGENT,
        }

    async def _get_json(self, path: str, params: dict[str, Any] | None = None) -> Any:
        url = f"{self.api_url}/repos/{self.owner}/{self.repo}{path}"
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.get(url, headers=self.headers, params=params)
        except httpx.TimeoutException as e:
            logger.warning("Upstream release request timed out", url=url)
            raise UpstreamUnavailableError("Upstream release API timed out") from e
        except httpx.HTTPError as e:
            logger.warning("Upstream release request failed", url=url, error=str(e))
            raise UpstreamUnavailableError("Upstream release API is unreachable") from e

        if response.status_code == 404:
            raise UpstreamUnavailableError("No releases found in upstream repository")
        if response.status_code in (403, 429):
            raise UpstreamRateLimitedError("GitHub API rate limit exceeded. Try again later.")
        if response.status_code >= 400:
            raise UpstreamUnavailableError(f"GitHub API error: {response.status_code}")

        try:
            return response.json()
        except ValueError as e:
            raise UpstreamUnavailableError("GitHub API returned invalid JSON") from e

    async def fetch_latest_release(self) -> dict[str, Any]:
        """Fetch the latest release, served from cache while it is fresh."""
        cached = self.cache.get()
        if cached is not None:
            return cached

        release = await self._get_json("/releases/latest")
        self.cache.set(release)
        logger.info("Latest upstream release fetched", tag=release.get("tag_name"))
        return release

    async def check_for_updates(self) -> UpdateCheckResult:
        """Compare the running version with the latest upstream release.

        Raises:
            UpstreamUnavailableError: If the release cannot be fetched or parsed.
        """
        release = await self.fetch_latest_release()
        tag = str(release.get("tag_name") or "")

        current = clean_version(self.current_version)
        latest = clean_version(tag)
        if current is None or latest is None:
            raise UpstreamUnavailableError(
                f"Invalid version format: current={self.current_version}, latest={tag}"
            )

        diff = version_diff(current, latest)
        return UpdateCheckResult(
            current_version=str(current),
            latest_version=str(latest),
            update_available=latest > current,
            version_diff=diff,
            release_url=release.get("html_url") or "",
            published_at=release.get("published_at") or "",
        )

    async def get_changelog(self, limit: int = 10) -> list[ReleaseNote]:
        """Fetch recent stable releases, newest first."""
        releases = await self._get_json("/releases", params={"per_page": limit})
        notes = []
        for release in releases:
            if release.get("draft") or release.get("prerelease"):
                continue
            tag = release.get("tag_name") or ""
            parsed = clean_version(tag)
            notes.append(
                ReleaseNote(
                    version=str(parsed) if parsed else tag,
                    name=release.get("name") or tag,
                    body=release.get("body") or "",
                    published_at=release.get("published_at") or "",
                    url=release.get("html_url") or "",
                )
            )
        return notes

