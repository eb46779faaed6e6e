"""활동 검색 그래프."""

from tottrot.graph.search.workflow import compiled_search_graph

__all__ = ["compiled_search_graph"]
