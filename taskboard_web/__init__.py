"""
Taskboard web layer (FastAPI).

Routers:
- taskboard_web.auth_routes.router  (/auth)
- taskboard_web.task_routes.router  (/task)

Use taskboard_web.app.create_app() to get a wired application.
"""
