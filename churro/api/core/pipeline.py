import logging
from timeit import default_timer as timer

from churro.api.core.directive import extract_reply
from churro.api.core.interactions import InteractionBuffer
from churro.api.core.inventory import InventoryStore
from churro.api.core.prompts import PromptComposer, build_catalog_description
from churro.api.core.view import ViewResolver
from churro.api.services.gateway import AnthropicGateway
from churro.api.services.models import ChatRequest, ChatResponse

logger = logging.getLogger(__name__)


class ChatPipeline:
    """
    One chat turn: compose the prompt, call the model, read its reply and
    resolve the view.

    Holds no per-request state; the only shared object is the read-only
    inventory. Gateway errors propagate to the caller.
    """

    def __init__(self, store: InventoryStore, gateway: AnthropicGateway):
        self.gateway = gateway
        self.composer = PromptComposer(build_catalog_description(store.all()))
        self.view_resolver = ViewResolver(store)

    def respond(self, request: ChatRequest) -> ChatResponse:
        interactions = InteractionBuffer.from_events(request.interactions)
        system_prompt = self.composer.compose(interactions.to_list())

        ts1 = timer()
        raw = self.gateway.complete(request.message, system=system_prompt, history=request.history)
        ts2 = timer()
        logger.info(f"Model replied with {len(raw)} characters in {ts2 - ts1:.2f} seconds")

        reply = extract_reply(raw)
        view = self.view_resolver.resolve(reply)
        return ChatResponse(message=reply.message, view=view)
