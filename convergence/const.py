"""Constants for the convergence library."""

# milliseconds between two attempts of the same check
POLL_INTERVAL = 10

DEFAULT_TIMEOUT = 2000
DEFAULT_WHEN_TIMEOUT = 2000
DEFAULT_ALWAYS_TIMEOUT = 200

CONF_TIMEOUT = "timeout"
CONF_INTERVAL = "interval"

# members a value must expose to be treated as a convergence
CONVERGENCE_CAPABILITIES = ("when", "always", "do", "run", "timeout")
