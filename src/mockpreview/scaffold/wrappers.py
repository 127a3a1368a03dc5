"""Environment providers a component may need to render."""

import logging
from dataclasses import dataclass, field
from ..models import ComponentAnalysis

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class WrapperSpec:
    """Imports, setup code and JSX tags for one provider."""

    kind: str
    imports: tuple[str, ...]
    open_tag: str
    close_tag: str
    setup: tuple[str, ...] = field(default_factory=tuple)


WRAPPERS: dict[str, WrapperSpec] = {
    "router": WrapperSpec(
        kind="router",
        imports=("import { BrowserRouter } from 'react-router-dom';",),
        open_tag="<BrowserRouter>",
        close_tag="</BrowserRouter>",
    ),
    "query": WrapperSpec(
        kind="query",
        imports=("import { QueryClient, QueryClientProvider } from '@tanstack/react-query';",),
        setup=(
            "const queryClient = new QueryClient({ defaultOptions: { queries: { retry: false } } });",
        ),
        open_tag="<QueryClientProvider client={queryClient}>",
        close_tag="</QueryClientProvider>",
    ),
}

# Outermost first.
WRAPPER_ORDER = ("router", "query")

# Accepted in analyses but never synthesized.
UNSUPPORTED_WRAPPERS = ("redux",)


def resolve_wrappers(analysis: ComponentAnalysis, label: str = "") -> list[WrapperSpec]:
    """Return the provider chain for ``analysis``, outermost first."""
    for kind in UNSUPPORTED_WRAPPERS:
        if analysis.needs_wrapper(kind):
            logger.warning(
                "%s requests a %s wrapper; rendering without it", label or "Component", kind
            )
    return [WRAPPERS[kind] for kind in WRAPPER_ORDER if analysis.needs_wrapper(kind)]
