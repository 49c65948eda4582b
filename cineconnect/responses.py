from rest_framework import status as http_status
from rest_framework.response import Response


def success(data=None, status=http_status.HTTP_200_OK):
    """ Wrap a payload in the {success, data} envelope every endpoint returns """
    body = {'success': True}
    if data is not None:
        body['data'] = data
    return Response(body, status=status)


def created(data):
    return success(data, status=http_status.HTTP_201_CREATED)


def no_content():
    return Response(status=http_status.HTTP_204_NO_CONTENT)
