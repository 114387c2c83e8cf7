import os

from app import create_app

# WSGI entry point (gunicorn index:app, or the serverless runtime)
app = create_app()

if __name__ == "__main__":
    app.run(port=int(os.environ.get('PORT', 5000)), debug=os.environ.get('FLASK_DEBUG') == '1')
