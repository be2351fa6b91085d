"""
Thavma Admin Server
===================

Run with:
    python app.py

First deployment:
    flask --app app seed

Visit:
    http://localhost:3001/              - Liveness
    http://localhost:3001/api/projects  - Public project list
"""

from thavma_admin import create_app

# WSGI entry point (gunicorn app:app, serverless handlers)
app = create_app()


if __name__ == '__main__':
    port = app.config['PORT']
    print("\n" + "=" * 60)
    print("Thavma Admin Server")
    print("=" * 60)
    print(f"Liveness:        http://localhost:{port}/")
    print(f"Projects API:    http://localhost:{port}/api/projects")
    print(f"Public base URL: {app.config['SERVER_URL']}")
    print("=" * 60 + "\n")

    app.run(host='0.0.0.0', port=port)
