"""
V1 API router aggregator — wires all endpoint modules together.
"""

from fastapi import APIRouter

from taskboard.api.v1.endpoints import auth, employees, health, tasks

api_router = APIRouter()

# Auth (login, logout, whoami)
api_router.include_router(auth.router)

# Employee directory
api_router.include_router(employees.router)

# Task registry
api_router.include_router(tasks.router)

# Health
api_router.include_router(health.router)
