from rest_framework.authentication import BaseAuthentication


class HeaderUserAuthentication(BaseAuthentication):
    """
    Hands DRF the user resolved by MockLoginUserMiddleware. Stateless,
    so no CSRF check applies.
    """

    def authenticate(self, request):
        user = getattr(request._request, "user", None)
        if user is None or not user.is_authenticated:
            return None
        return (user, None)

    def authenticate_header(self, request):
        # Makes DRF answer 401 rather than 403 for anonymous requests
        return "X-User-NAME"
