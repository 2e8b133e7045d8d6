"""Album Importer.

Infers studio, model and title from loosely named photo-set folders,
lets an operator reconcile low-confidence guesses, and commits the
accepted folders into the album catalog and permanent storage.
"""

try:
    # Try to get version from setuptools_scm (when installed from git)
    from ._version import version as __version__
except ImportError:
    __version__ = "0.1.0-dev"

__author__ = "Album Importer Team"
