from __future__ import annotations

from flask import Flask

from ..container import Container
from ..core.enums import Role
from ..http.context import admin_required, json_payload, page_request, query_arg
from ..http.responses import created, paginated, success


def register(app: Flask, container: Container) -> None:
    prefix = container.settings.api_prefix
    users = container.user_service

    @app.route(f"{prefix}/users", methods=["GET"], endpoint="users_list")
    def list_users():
        page = users.list_users(page_request(), search=query_arg("search"))
        return paginated(page, [u.to_public() for u in page.items])

    @app.route(f"{prefix}/users/<int:user_id>", methods=["GET"], endpoint="users_get")
    def get_user(user_id: int):
        return success("User retrieved successfully", users.get_user(user_id).to_public())

    @app.route(f"{prefix}/users", methods=["POST"], endpoint="users_create")
    @admin_required
    def create_user():
        user = users.create_user(json_payload())
        return created("User created successfully", user.to_public())

    @app.route(f"{prefix}/users/create", methods=["POST"], endpoint="users_register")
    def register_user():
        # Public sign-up; never grants admin.
        user = users.create_user(json_payload(), force_role=Role.USER)
        return created("User created successfully", user.to_public())

    @app.route(f"{prefix}/users/<int:user_id>", methods=["PUT"], endpoint="users_update")
    @admin_required
    def update_user(user_id: int):
        user = users.update_user(user_id, json_payload())
        return success("User updated successfully", user.to_public())

    @app.route(f"{prefix}/users/<int:user_id>", methods=["DELETE"], endpoint="users_delete")
    @admin_required
    def delete_user(user_id: int):
        users.delete_user(user_id)
        return success("User deleted successfully")
