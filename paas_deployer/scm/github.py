"""
GitHub archive resolver.

Resolves a commit to the codeload archive link GitHub redirects to, swaps the
legacy tarball name for the zip one, and streams the archive to disk.

Usage:
    resolver = GitHubArchiveResolver(token="...")
    url = resolver.normalize(resolver.resolve("abc123", "owner/repo"))
    resolver.fetch(url, Path("/tmp/heaven-abc123.zip"))
"""

from pathlib import Path
from typing import Optional

import requests

from paas_deployer import constants as CONSTANTS
from paas_deployer.core.exceptions import FetchError, SourceNotFoundError
from paas_deployer.logger import logger

_REDIRECT_CODES = (301, 302, 303, 307, 308)


def normalize_archive_url(archive_url: str) -> str:
    """
    Replace the last legacy.tar.gz token with legacy.zip.

    Everything else in the URL (path segments after the token, query string)
    is left untouched; URLs without the token are returned unchanged.

    Example:
        >>> normalize_archive_url("https://codeload.github.com/o/r/legacy.tar.gz/abc123")
        "https://codeload.github.com/o/r/legacy.zip/abc123"
    """
    head, token, tail = archive_url.rpartition(CONSTANTS.LEGACY_TARBALL_TOKEN)
    if not token:
        return archive_url
    return head + CONSTANTS.LEGACY_ZIP_TOKEN + tail


class GitHubArchiveResolver:
    """
    ArchiveResolver backed by the GitHub REST API.

    Holds only connection configuration, so one instance can serve
    concurrent runs.
    """

    def __init__(
        self,
        token: Optional[str] = None,
        api_url: str = CONSTANTS.DEFAULT_GITHUB_API_URL,
        timeout: int = CONSTANTS.DEFAULT_REQUEST_TIMEOUT_SECONDS,
        session: Optional[requests.Session] = None
    ):
        self.api_url = api_url.rstrip("/")
        self.timeout = timeout
        self._token = token
        self._session = session or requests.Session()

    def _headers(self) -> dict:
        headers = {"Accept": "application/vnd.github+json"}
        if self._token:
            headers["Authorization"] = f"token {self._token}"
        return headers

    def resolve(self, commit_sha: str, repository_identifier: str) -> str:
        """
        Return the archive link for a commit.

        GitHub answers the tarball endpoint with a redirect; the Location
        header is the link, so redirects are not followed.

        Raises:
            SourceNotFoundError: On 404, any non-redirect answer, or transport failure
        """
        url = f"{self.api_url}/repos/{repository_identifier}/tarball/{commit_sha}"
        logger.debug(f"Resolving archive link: {url}")
        try:
            response = self._session.get(
                url,
                headers=self._headers(),
                allow_redirects=False,
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise SourceNotFoundError(repository_identifier, commit_sha, original_error=e)

        location = response.headers.get("Location")
        if response.status_code in _REDIRECT_CODES and location:
            return location

        raise SourceNotFoundError(repository_identifier, commit_sha, status_code=response.status_code)

    def normalize(self, archive_url: str) -> str:
        return normalize_archive_url(archive_url)

    def fetch(self, archive_url: str, destination_path: Path) -> Path:
        """
        Stream the archive to destination_path, creating parent directories.

        Raises:
            FetchError: On transport failure, non-2xx response or local disk error
        """
        destination_path = Path(destination_path)

        try:
            destination_path.parent.mkdir(parents=True, exist_ok=True)
            with self._session.get(archive_url, stream=True, timeout=self.timeout) as response:
                if not 200 <= response.status_code < 300:
                    raise FetchError(archive_url, status_code=response.status_code)
                with open(destination_path, "wb") as f:
                    for chunk in response.iter_content(chunk_size=CONSTANTS.DOWNLOAD_CHUNK_SIZE):
                        if chunk:
                            f.write(chunk)
        except (requests.RequestException, OSError) as e:
            raise FetchError(archive_url, original_error=e)

        logger.debug(f"Fetched {archive_url} -> {destination_path}")
        return destination_path
