# app/agent/graph.py
from langgraph.graph import START, END, StateGraph

from app.agent.state import PipelineState
from app.agent.nodes import (
    assemble_node,
    check_text_node,
    extract_node,
    ocr_node,
    route_ok,
    route_start,
    validate_node,
)

builder = StateGraph(PipelineState)

builder.add_node("validate", validate_node)
builder.add_node("ocr", ocr_node)
builder.add_node("check_text", check_text_node)
builder.add_node("extract", extract_node)
builder.add_node("assemble", assemble_node)

builder.add_conditional_edges(START, route_start, {
    "validate": "validate",
    "check_text": "check_text",
})
builder.add_conditional_edges("validate", route_ok, {"ok": "ocr", "error": END})
builder.add_conditional_edges("ocr", route_ok, {"ok": "check_text", "error": END})
builder.add_conditional_edges("check_text", route_ok, {"ok": "extract", "error": END})
builder.add_edge("extract", "assemble")
builder.add_edge("assemble", END)

# no checkpointer: each upload lives for one request only
rx_graph = builder.compile()
