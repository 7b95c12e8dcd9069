from rest_framework.response import Response
from rest_framework.permissions import IsAuthenticated, AllowAny
from rest_framework.views import APIView
from .serializers import MeSerializer

# Create your views here.
class MeView(APIView):
    """Profil de l'utilisateur connecté (rôle + droit de traitement des résultats)."""
    permission_classes = [IsAuthenticated]

    def get(self, request):
        return Response(MeSerializer(request.user).data)

class HealthView(APIView):
    """Sonde publique pour le load balancer / la supervision."""
    permission_classes = [AllowAny]
    authentication_classes = []

    def get(self, request):
        return Response({"status": "ok"})
