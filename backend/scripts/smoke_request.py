"""Run a quick CRUD round trip against the app.

Uses FastAPI's TestClient against an in-memory database and prints
each status code, so the wiring can be checked without starting a
server. Usage: python scripts/smoke_request.py
"""

import os
import sys

# Ensure backend folder is on sys.path so `tutorial_api` imports work when running this script directly
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))
os.environ.setdefault("DATABASE_URL", "sqlite://")

from fastapi.testclient import TestClient
from tutorial_api.main import app


def main():
    client = TestClient(app)
    created = client.post('/api/tutorials', json={'title': 'Spring Security', 'description': 'Secure your app', 'published': True})
    print('CREATE:', created.status_code, created.json())
    tid = created.json()['id']
    print('PUBLISHED:', client.get('/api/tutorials/published').status_code)
    updated = client.put(f'/api/tutorials/{tid}', json={'title': 'Spring Security', 'description': 'Secure your app', 'published': False})
    print('UNPUBLISH:', updated.status_code, updated.json())
    print('PUBLISHED after unpublish:', client.get('/api/tutorials/published').status_code)
    print('DELETE:', client.delete(f'/api/tutorials/{tid}').status_code)
    print('LIST:', client.get('/api/tutorials').status_code)


if __name__ == '__main__':
    main()
