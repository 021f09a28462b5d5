"""HR timekeeping package.

Feature modules (ledger, attendance, payroll, audit, ...) each own their model,
repository port, MySQL adapter, service and a thin Flask controller.
"""
