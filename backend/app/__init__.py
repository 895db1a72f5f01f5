"""Caption generator backend, layered the Clean Architecture way.

Layers:
- domain: caption parser, use cases, repository interfaces and gateway errors
- data: Gemini client and repository implementations
- presentation: FastAPI app factory and routers
- core: configuration, service wiring and logging
"""
