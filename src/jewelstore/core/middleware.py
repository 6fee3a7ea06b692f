"""Core middleware for Jewelstore."""

from .sessions import Role, SessionContext


class SessionContextMiddleware:
    """Attach the admin and customer auth sessions to every request.

    Sets request.admin_auth and request.customer_auth for views and templates.
    Must run after SessionMiddleware.
    """

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        request.admin_auth = SessionContext(Role.ADMIN, request.session)
        request.customer_auth = SessionContext(Role.CUSTOMER, request.session)

        response = self.get_response(request)
        return response
