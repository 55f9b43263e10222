"""Bundle format implementations.

Each subpackage provides a BundleReader for one bundle format and
registers a factory with the ReaderRegistry when imported.
"""

# Format modules are imported dynamically by ReaderRegistry.discover_formats()
# to handle missing dependencies gracefully
