import os
from rest_framework import status
from rest_framework.decorators import api_view
from rest_framework.response import Response
from django.core.management import call_command
from django.core.management.base import CommandError
import structlog

logger = structlog.get_logger()


@api_view(["POST"])
def initialize_data(request):
    file_name = request.data.get("file", "SAMPLE_DECKS.json")
    # Only bundled files: no absolute paths or directory parts over HTTP
    if (
        not isinstance(file_name, str)
        or file_name in ("", ".", "..")
        or os.path.basename(file_name) != file_name
    ):
        logger.warning("initialize_data_rejected", file=str(file_name))
        return Response(
            {"error": "file must be a plain file name"},
            status=status.HTTP_400_BAD_REQUEST,
        )

    logger.info("initialize_data", file=file_name)
    try:
        call_command("load_decks", file=file_name)
    except CommandError as e:
        logger.error("initialize_data_failed", file=file_name, error=str(e))
        return Response({"error": str(e)}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)
    return Response(
        {"message": f"Data initialized successfully from {file_name}"},
        status=status.HTTP_200_OK,
    )
