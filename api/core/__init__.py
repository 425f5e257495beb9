"""
Shared, cross-cutting code for the API.

`core/` should contain small building blocks that multiple features use
(DB wiring, schema bootstrap, settings, logging). Keep resource definitions in
the corresponding feature package (e.g. `projects/`) and the generic CRUD
plumbing in `crud/`.
"""
