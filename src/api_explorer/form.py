"""Per-endpoint form state, owned by whichever presentation renders it."""

from api_explorer.composer import compose
from api_explorer.executor import Executor
from api_explorer.outcome import CompositionError, NetworkError, Success
from api_explorer.registry.base import Endpoint


class EndpointForm:
    """Field values, raw body and last outcome for one endpoint.

    ``required`` parameters are not validated before running; empty
    fields are sent as empty strings.

    Overlapping ``run`` calls on the same form are not cancelled: both
    complete and ``last_outcome`` keeps whichever finished last.
    """

    def __init__(self, endpoint: Endpoint, executor: Executor):
        self.endpoint = endpoint
        self.executor = executor
        self.values: dict[str, str] = {}
        self.body = ""
        self.last_outcome: Success | CompositionError | NetworkError | None = None

    def set_value(self, name: str, value: str) -> None:
        self.values[name] = value

    def set_body(self, text: str) -> None:
        self.body = text

    async def run(self) -> Success | CompositionError | NetworkError:
        composed = compose(self.endpoint, dict(self.values), self.body)
        if isinstance(composed, CompositionError):
            self.last_outcome = composed
            return composed

        outcome = await self.executor.execute(composed)
        self.last_outcome = outcome
        return outcome
