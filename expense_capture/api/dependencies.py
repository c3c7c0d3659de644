"""Dependency injection for FastAPI endpoints"""

from fastapi import Request

from expense_capture.infrastructure.clients.expense_service import ExpenseServiceClient


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_expense_client() -> ExpenseServiceClient:
    """Provide expense service client instance"""
    return ExpenseServiceClient()
