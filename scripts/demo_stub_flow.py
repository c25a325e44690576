"""Demo: walk the helper surface against the in-process stub deployment.

Run with:
    pip install -e '.[stub]'
    python scripts/demo_stub_flow.py
"""

from __future__ import annotations

import os

from svctest import ServiceClient, Transport, find_local_by_id, read_array_json_result
from svctest.services import bus_service, users_service
from svctest.stubs import StubDeployment


def main() -> None:
    os.environ.setdefault("DH", "stub.local:8080")
    deployment = StubDeployment()
    client = ServiceClient(Transport(client_factory=deployment.client_factory))

    # ── Step 1: register a user ─────────────────────────────────────
    user_id, username = users_service.register_new_user(client, "ROLE_USER")
    print(f"1. POST /authentication-service/users → 204  id={user_id[:8]}…")

    # ── Step 2: anonymous access is rejected ────────────────────────
    deployment.respond("GET", "/orders", 401)
    client.check_unauthorized("/orders")
    print("2. GET  /orders (no token)            → 401")

    # ── Step 3: authorized access, token fetched once ───────────────
    deployment.respond("GET", "/orders", 200, [{"id": "o1"}, {"id": "o2"}])
    orders = read_array_json_result(client.get_authorized(username, "/orders"))
    client.get_authorized_and_check_status_code(username, "/orders", 200)
    order = find_local_by_id(orders, "o2", "id")
    token_calls = deployment.requests_to("/authentication-service/oauth/token")
    print(
        f"3. GET  /orders (bearer) x2           → 200  "
        f"found={order['id']}  token requests={len(token_calls)}"
    )

    # ── Step 4: publish on the bus bridge ───────────────────────────
    bus_service.send_nats_message(client, "orders.shipped", {"orderId": "o2"})
    print(f"4. POST /nats-remote/orders.shipped   → 200  {deployment.messages}")

    print("\nAll steps completed.")


if __name__ == "__main__":
    main()
