"""활동 검색 그래프 워크플로우 구성."""

from langgraph.graph import END, StateGraph

from tottrot.graph.search.nodes import build_request, dispatch_request, normalize_response
from tottrot.graph.search.state import SearchState


def _route_after_dispatch(state: SearchState) -> str:
    """전송 단계 실패 시 정규화를 건너뛴다."""
    if state.get("error_kind"):
        return END
    return "normalize_response"


def _create_search_workflow() -> StateGraph:
    """활동 검색 그래프 워크플로우를 생성합니다."""
    workflow = StateGraph(SearchState)

    workflow.add_node("build_request", build_request)
    workflow.add_node("dispatch_request", dispatch_request)
    workflow.add_node("normalize_response", normalize_response)

    workflow.set_entry_point("build_request")
    workflow.add_edge("build_request", "dispatch_request")
    workflow.add_conditional_edges("dispatch_request", _route_after_dispatch, ["normalize_response", END])
    workflow.add_edge("normalize_response", END)

    return workflow


compiled_search_graph = _create_search_workflow().compile()
