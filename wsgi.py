# wsgi.py
# WSGI entrypoint for Gunicorn:
#   gunicorn wsgi:app -b 0.0.0.0:$PORT -w 2 -k gthread

from user_microservice import create_app

app = create_app()
