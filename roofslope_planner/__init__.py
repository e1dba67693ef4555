"""Roof Slope Planner - drainage slopes for flat and low-slope roofs.

Given the editable vertices of a roof, its top surface and the drain
locations, computes for every vertex an elevation offset proportional to its
on-roof path length to the nearest drain, so water flows to the drains.

Subpackages:
    model: Vertex arena, graph, path results, skip records, metrics
    core: Surfaces, spatial index, graph builder, drain resolution
    routing: Nearest-drain path strategies and distance field
    planning: Settings, slope assignment, run orchestration
"""
