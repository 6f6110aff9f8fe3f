from print_relay.models import PrintRequest, RelayOutcome
from print_relay.relay import relay
from print_relay.validator import validate_request

__all__ = ["PrintRequest", "RelayOutcome", "relay", "validate_request"]
