"""Campus attendance engine.

Feature modules (scans, attendance, meals, justifications, stats) each keep a
model, a repository protocol with its MySQL implementation, a service and a
thin Flask controller.
"""
