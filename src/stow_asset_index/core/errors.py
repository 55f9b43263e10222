"""Exception types raised by the asset index generator."""


class AssetIndexError(Exception):
    """Base class for all asset index errors."""


class ReaderUnavailableError(AssetIndexError):
    """The bundle reader capability could not be acquired.

    This is the only error that aborts a whole run. It is raised before
    any target document is touched.
    """


class BundleDecodeError(AssetIndexError):
    """A single bundle could not be opened or decoded."""


class ConfigError(AssetIndexError):
    """The index configuration file is missing keys or has invalid values."""
