"""GitOperations — runs ``git`` subprocesses against a working tree.

Satisfies the :class:`~mcp_git.repository.operations.RepositoryOperations`
protocol.  stderr is merged into stdout so failure reasons carry git's own
diagnostics, and commands against the same working tree run one at a time.
"""

from __future__ import annotations

import asyncio
import logging
import os
import shlex

from mcp_git.repository.models import GitConfig, OperationResult

logger = logging.getLogger(__name__)

# Headless: never wait on a credential prompt.
_BASE_ENV = {
    "GIT_TERMINAL_PROMPT": "0",
}


class GitOperations:
    """git-backed repository operations.

    Usage::

        ops = GitOperations(GitConfig(working_dir="/srv/repo"))
        result = await ops.status()
        if result.success:
            print(result.output)
    """

    def __init__(self, config: GitConfig | None = None) -> None:
        self._config = config or GitConfig()
        self._lock = asyncio.Lock()

    @property
    def config(self) -> GitConfig:
        return self._config

    async def status(self) -> OperationResult:
        return await self._git("status")

    async def diff(self, file_path: str | None = None, staged: bool = False) -> OperationResult:
        args = ["diff"]
        if staged:
            args.append("--staged")
        if file_path is not None:
            args.extend(("--", file_path))
        return await self._git(*args)

    async def commit(self, message: str, add_all: bool = False) -> OperationResult:
        if add_all:
            staged = await self._git("add", ".")
            if not staged.success:
                return staged
        return await self._git("commit", "-m", message)

    async def log(self, max_count: int = 10, oneline: bool = True) -> OperationResult:
        args = ["log", f"--max-count={max_count}"]
        if oneline:
            args.append("--oneline")
        return await self._git(*args)

    async def branch(self, action: str = "list", branch_name: str | None = None) -> OperationResult:
        if action == "list":
            return await self._git("branch", "-a")
        if action in ("create", "delete"):
            if branch_name is None:
                return OperationResult.fail(f"Branch name required for {action} action")
            if action == "create":
                return await self._git("branch", branch_name)
            return await self._git("branch", "-d", branch_name)
        return OperationResult.fail(f"Unknown action: {action}")

    async def checkout(self, target: str, create_new: bool = False) -> OperationResult:
        args = ["checkout"]
        if create_new:
            args.append("-b")
        args.append(target)
        return await self._git(*args)

    async def add(self, files: str) -> OperationResult:
        return await self._git("add", "--", files)

    async def push(
        self,
        remote: str | None = None,
        branch: str | None = None,
        set_upstream: bool = False,
        force: bool = False,
    ) -> OperationResult:
        args = ["push"]
        if force:
            args.append("--force")
        if set_upstream:
            args.append("--set-upstream")
        if branch is not None and remote is None:
            remote = self._config.default_remote
        if remote is not None:
            args.append(remote)
        if branch is not None:
            args.append(branch)
        return await self._git(*args)

    async def _git(self, *args: str) -> OperationResult:
        """Run one git command and fold its outcome into an :class:`OperationResult`."""
        cmd = [self._config.executable, *args]
        timeout = self._config.timeout
        env = {**os.environ, **_BASE_ENV, **self._config.env}

        async with self._lock:
            logger.debug("Running %s in %s", shlex.join(cmd), self._config.working_dir)
            try:
                proc = await asyncio.create_subprocess_exec(
                    *cmd,
                    cwd=self._config.working_dir,
                    stdout=asyncio.subprocess.PIPE,
                    stderr=asyncio.subprocess.STDOUT,
                    env=env,
                )
            except OSError as exc:
                logger.warning("Could not start %s: %s", cmd[0], exc)
                return OperationResult.fail(str(exc))

            try:
                stdout, _ = await asyncio.wait_for(proc.communicate(), timeout=timeout)
            except TimeoutError:
                proc.kill()
                await proc.wait()
                logger.warning("%s timed out after %ss", shlex.join(cmd), timeout)
                return OperationResult.fail(f"Command timed out after {timeout}s")

        output = stdout.decode(errors="replace").strip() if stdout else ""
        if proc.returncode != 0:
            logger.info("%s exited with %s", shlex.join(cmd), proc.returncode)
            return OperationResult.fail(f"Command failed with exit code {proc.returncode}: {output}")
        return OperationResult.ok(output)
