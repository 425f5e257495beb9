"""
Generic list/create/delete plumbing shared by every table-backed resource.
"""
