"""
Feature modules for the EcoChallenge backend.

Each module keeps its own models, exceptions, repository (Supabase and
in-memory), service and routes. The auth module also exposes Protocol
interfaces; other modules depend on those rather than on the concrete
service.
"""
