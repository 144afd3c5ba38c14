"""Sistem Absensi PDM package.

Feature modules (users, participants, periods, attendance, reports) each carry
a model, a repository interface with a key-value backed implementation, a
service holding the business rules, and a thin Flask controller.
"""
