from django.core.management import call_command
from django.core.management.base import CommandError
from rest_framework import status, viewsets
from rest_framework.decorators import action, api_view, permission_classes
from rest_framework.permissions import AllowAny, IsAdminUser
from rest_framework.response import Response

from microlearning.domain.enums import ACHIEVEMENT_LABELS


@api_view(["POST"])
@permission_classes([IsAdminUser])
def initialize_data(request):
    file_name = request.data.get("file", "MOCK_DATA.json")
    try:
        call_command("init_data", file=file_name)
    except CommandError as e:
        return Response({"error": str(e)}, status=status.HTTP_400_BAD_REQUEST)
    return Response(
        {"message": f"Data initialized successfully from {file_name}"},
        status=status.HTTP_200_OK,
    )


class UserViewSet(viewsets.ViewSet):
    """
    ViewSet for user-related operations.
    """

    permission_classes = [AllowAny]

    @action(detail=False, methods=["get"])
    def me(self, request):
        """
        Returns the logged-in user's gamification state.
        """
        user = request.user
        if not user.is_authenticated:
            return Response(
                {"error": "User not authenticated"}, status=status.HTTP_401_UNAUTHORIZED
            )
        return Response(
            {
                "username": user.username,
                "total_points": user.total_points,
                "level": user.level,
                "streak": user.streak,
                "achievements": [
                    {
                        "achievement_id": a.achievement_id,
                        "label": ACHIEVEMENT_LABELS.get(a.achievement_id, a.achievement_id),
                        "unlocked_at": a.unlocked_at.isoformat(),
                    }
                    for a in user.achievements.all()
                ],
            },
            status=status.HTTP_200_OK,
        )
