"""
API error handling shared by all apps.

Resources raise APIException subclasses; DRF routes them through
``api_exception_handler`` (REST_FRAMEWORK['EXCEPTION_HANDLER']).
"""
from rest_framework import exceptions, status
from rest_framework.views import exception_handler


class MessageAPIException(exceptions.APIException):
    """
    Error rendered as ``{"message": "..."}`` instead of DRF's ``detail`` body.
    """
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'Bad request.'
    default_code = 'bad_request'


def api_exception_handler(exc, context):
    """Run DRF's handler, then flatten MessageAPIException bodies."""
    response = exception_handler(exc, context)

    if response is not None and isinstance(exc, MessageAPIException):
        response.data = {'message': str(exc.detail)}

    return response
