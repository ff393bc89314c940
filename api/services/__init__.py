"""Service layer for business logic.

Services encapsulate the certificate rules, keeping routes thin and focused
on HTTP handling.

Layer hierarchy:
    Routes (HTTP) -> Services (Business Logic) -> Repositories (Roster)

Services should:
- Decide authorization and orchestrate rendering
- Raise domain exceptions for every failure

Services should NOT:
- Know about HTTP request/response details (status codes, headers)
"""
