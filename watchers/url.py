"""
URL Watcher - fetches a script over HTTP and optionally runs it.

The fetch alone proves network reachability. With execute enabled the
body is piped into bash, so the remote end decides what "healthy" means.
Both the download and the script are bounded by the check deadline.
The script runs in its own session; on deadline expiry its process
group and every descendant still reachable from it are killed.
Processes that detached from the tree are left running and no longer
hold up the check.
"""

import logging
import os
import signal
import subprocess
from typing import List

import psutil
import requests

from core.exceptions import CheckFailure

from .base import Deadline, Watcher, WatcherConfig

logger = logging.getLogger(__name__)

BASH = "/bin/bash"

# Single-byte reads: larger ones block until filled even past the deadline.
FETCH_CHUNK_SIZE = 1

# How long to collect output after killing a timed out script.
DRAIN_SECONDS = 1.0


def kill_process_tree(process: subprocess.Popen) -> None:
    """SIGKILL a session leader, its process group and its descendants."""
    try:
        descendants = psutil.Process(process.pid).children(recursive=True)
    except psutil.NoSuchProcess:
        descendants = []

    try:
        os.killpg(process.pid, signal.SIGKILL)
    except ProcessLookupError:
        pass

    for child in descendants:
        try:
            child.kill()
        except psutil.NoSuchProcess:
            pass


class UrlWatcher(Watcher):
    """Checks a URL can be fetched and, optionally, that its script succeeds."""

    kind = "url"

    def __init__(
        self,
        url: str,
        execute: bool = False,
        xtrace: bool = False,
        config: WatcherConfig = None,
        name: str = None,
        session: requests.Session = None
    ):
        super().__init__(config, name)
        self.url = url
        self.execute = execute
        self.xtrace = xtrace
        self._session = session or requests.Session()

    def fetch_script(self, deadline: Deadline) -> bytes:
        logger.debug("Fetching script")
        remaining = deadline.remaining()
        if remaining <= 0:
            raise CheckFailure("deadline exceeded before fetch", watcher=self.name)
        try:
            response = self._session.get(self.url, timeout=remaining, stream=True)
            with response:
                response.raise_for_status()
                chunks = []
                for chunk in response.iter_content(chunk_size=FETCH_CHUNK_SIZE):
                    if deadline.expired():
                        raise CheckFailure("deadline exceeded during fetch", watcher=self.name)
                    chunks.append(chunk)
        except requests.RequestException as e:
            raise CheckFailure(f"Fetch failed: {e}", watcher=self.name) from e

        body = b"".join(chunks)
        logger.debug(f"Returned: {body.decode(errors='replace')}")
        return body

    def command(self) -> List[str]:
        args = [BASH]
        if self.xtrace:
            args.append("-x")
        return args

    def execute_script(self, deadline: Deadline, body: bytes) -> None:
        logger.debug("Executing script")
        remaining = deadline.remaining()
        if remaining <= 0:
            raise CheckFailure("deadline exceeded before execute", watcher=self.name)

        process = subprocess.Popen(
            self.command(),
            stdin=subprocess.PIPE,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            start_new_session=True,
        )
        try:
            output, _ = process.communicate(input=body, timeout=remaining)
        except subprocess.TimeoutExpired:
            kill_process_tree(process)
            try:
                output, _ = process.communicate(timeout=DRAIN_SECONDS)
            except subprocess.TimeoutExpired:
                # A detached process outside the tree still holds the pipe open.
                process.stdout.close()
                process.wait()
                output = b""
            logger.error(f"Timeout executing script:\n{output.decode(errors='replace')}")
            raise CheckFailure(
                f"script did not finish within {self.timeout:g}s",
                watcher=self.name
            )

        text = output.decode(errors="replace")
        if process.returncode != 0:
            logger.error(f"Error executing script: exit {process.returncode}\n{text}")
            raise CheckFailure(f"script exited with {process.returncode}", watcher=self.name)
        logger.debug(f"Executed script success:\n{text}")

    def check(self, deadline: Deadline) -> None:
        body = self.fetch_script(deadline)
        if self.execute:
            self.execute_script(deadline, body)
