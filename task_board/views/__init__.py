"""View rendering and content negotiation.

This package owns everything between "the handler has its data" and "the
HTML response leaves": template rendering, context enrichment, htmx
negotiation and the per-request PageContext that composes them.
"""
