"""ASGI entrypoint serving both the REST API and the Socket.IO endpoint.

Run with: uvicorn cineconnect.asgi:application
"""
import os

import socketio
from django.core.asgi import get_asgi_application

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'cineconnect.settings')

# Django must be set up before the realtime server imports settings and models
django_asgi_app = get_asgi_application()

from realtime.server import sio  # noqa: E402

application = socketio.ASGIApp(sio, other_asgi_app=django_asgi_app, socketio_path='socket.io')
