"""
Contact API errors.
"""
from rest_framework import status

from core.exceptions import MessageAPIException


class ContactBadRequest(MessageAPIException):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'Invalid contact submission.'
    default_code = 'bad_request'


class ContactFloodLimited(MessageAPIException):
    status_code = status.HTTP_429_TOO_MANY_REQUESTS
    default_detail = 'Too many contact messages. Try again later.'
    default_code = 'flood_limited'

    def __init__(self, detail=None, wait=None):
        super().__init__(detail)
        # DRF's handler turns `wait` into a Retry-After header
        self.wait = wait


class ContactMailFailure(MessageAPIException):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = 'The contact message could not be sent.'
    default_code = 'mail_failure'
