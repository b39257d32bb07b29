"""
apppack - package annotated AI-generated source text into a project zip.
"""

from .packager import generate_project_zip, package_enhanced_project, package_project
from .version import __version__

__all__ = [
    "__version__",
    "generate_project_zip",
    "package_enhanced_project",
    "package_project",
]
