"""Exception types raised while loading configuration and feed data."""


class NezumiError(Exception):
    """Base class for errors that abort startup."""


class ConfigError(NezumiError):
    """The configuration file could not be read, parsed or validated."""


class FeedError(NezumiError):
    """A feed request failed at the transport or HTTP level."""


class FeedSchemaError(FeedError):
    """A feed body was not JSON or did not match the expected SIRI shape."""
