"""
rhs_packaging - release tarball builder for rhs-hadoop-install

Collects the install scripts from a git working directory and assembles a
versioned, reproducible tarball ready for upload to an artifact store.

Architecture:
- Tarball Context: option handling, version resolution, file collection, archive assembly
- Delivery Context: document conversion and publishing via external tools
"""

__version__ = "0.1.0"
