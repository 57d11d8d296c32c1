"""Install agent skills from GitHub into AI coding tools."""

__version__ = "1.2.0"

# Export protocol interfaces for type hints and dependency injection
from expcat_skills.protocols import (
    FileSystem,
    HostPlatform,
    InstallTarget,
    SourceRepository,
)

__all__ = [
    "__version__",
    "FileSystem",
    "HostPlatform",
    "InstallTarget",
    "SourceRepository",
]
