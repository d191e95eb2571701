"""Alexandria.

Backend of a social-learning platform. The revenue ledger is the part with
real design content: course and tutoring payments are split between the
platform and the educator, opened at a payment gateway and reconciled from
verify callbacks and signed webhooks through an explicit status machine.

Packages
--------

- ``core``: configuration-aware logging, monitoring, errors, persistence and
  the API schemas.
- ``gateway``: the payment gateway port and its HTTP adapter.
- ``ledger``: split arithmetic, the payment state machine and the ledger
  service.
- ``points``, ``social``, ``libraries``, ``courses``, ``users``,
  ``earnings``, ``analytics``: the surrounding business rules.
- ``server``: the FastAPI application.
"""
