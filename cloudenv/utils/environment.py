"""
Centralized hosting-environment access.

Single source of truth for the project root, the working directory, and which
hosting platform the process is running on.
"""

import os
from enum import Enum
from pathlib import Path
from typing import Mapping, Optional, Union

# Files whose presence marks a directory as the project root
PROJECT_MARKERS = ("pyproject.toml", "setup.py", "setup.cfg", ".git")


class Platform(str, Enum):
    """Hosting platform the process is running on."""
    LOCAL = "local"
    CLOUD_FOUNDRY = "cloudfoundry"
    KUBERNETES = "kubernetes"


class EnvironmentInfo:
    """
    Centralized access to hosting-environment details.

    Usage:
        env = EnvironmentInfo()
        print(env.project_root)  # PosixPath('/home/me/app')
        print(env.platform)      # Platform.LOCAL
    """

    def __init__(
        self,
        project_root: Optional[Union[str, Path]] = None,
        environ: Optional[Mapping[str, str]] = None,
    ):
        self._explicit_root = Path(project_root) if project_root else None
        self._environ = environ if environ is not None else os.environ
        self._project_root: Optional[Path] = None

    @property
    def working_dir(self) -> Path:
        """Current working directory (read on every access)."""
        return Path.cwd()

    @property
    def project_root(self) -> Path:
        """
        Get the project root directory.

        Priority:
        1. Explicit project_root argument
        2. PROJECT_ROOT environment variable
        3. Nearest ancestor of the working directory holding a project marker
        4. The working directory itself
        """
        if self._project_root is None:
            if self._explicit_root is not None:
                self._project_root = self._explicit_root
            elif self._environ.get("PROJECT_ROOT", "").strip():
                self._project_root = Path(self._environ["PROJECT_ROOT"].strip())
            else:
                self._project_root = find_project_root(self.working_dir)

        return self._project_root

    @property
    def platform(self) -> Platform:
        """Detect the hosting platform from well-known environment variables."""
        if self._environ.get("VCAP_APPLICATION"):
            return Platform.CLOUD_FOUNDRY
        if self._environ.get("KUBERNETES_SERVICE_HOST"):
            return Platform.KUBERNETES
        return Platform.LOCAL

    def resolve_path(self, path: Union[str, Path], relative_to_project: bool = True) -> Path:
        """
        Resolve a path against the project root or the working directory.

        Absolute paths are returned unchanged.
        """
        path = Path(path)
        if path.is_absolute():
            return path
        base = self.project_root if relative_to_project else self.working_dir
        return base / path


def find_project_root(start: Path) -> Path:
    """Walk up from start looking for a project marker; fall back to start."""
    start = start.resolve()
    for directory in (start, *start.parents):
        if any((directory / marker).exists() for marker in PROJECT_MARKERS):
            return directory
    return start
