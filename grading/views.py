from rest_framework import viewsets, status
from rest_framework.response import Response
from django_filters.rest_framework import DjangoFilterBackend

from accounts.permissions import IsManagerOrReadOnly
from .models import GradingSystem
from .serializers import GradingSystemSerializer

class GradingSystemViewSet(viewsets.ModelViewSet):
    queryset = GradingSystem.objects.prefetch_related("grades").order_by("-is_default","name")
    serializer_class = GradingSystemSerializer
    permission_classes = [IsManagerOrReadOnly]
    filter_backends = [DjangoFilterBackend]
    filterset_fields = ["is_default","name"]

    def destroy(self, request, *args, **kwargs):
        system = self.get_object()
        if system.is_in_use:
            return Response({"detail":"Cannot delete grading system that is being used in results"},
                            status=status.HTTP_400_BAD_REQUEST)
        system.delete()
        return Response(status=status.HTTP_204_NO_CONTENT)
