"""blast-kupo payload templating.

Compiles declarative request-body specifications into reusable renderer
trees whose string leaves are re-randomized on every render. Used to
generate load-test traffic for a Kupo chain indexer.

Architecture:
- generators/   - Random primitives, domain patterns, function namespace
- templates/    - Compiler, renderer nodes, template dialect
- payloads/     - Payload definitions loaded from disk and compiled once
- api/          - FastAPI preview service
"""
