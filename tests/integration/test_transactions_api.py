"""
Integration tests for money movement endpoints.

These tests verify:
1. POST /v1/transactions/transfer - moves money and records the entry
2. POST /v1/transactions/fine - administrator fines, capped at the balance
3. GET /v1/transactions - caller history
4. Error responses carry the standard body and status codes
"""

import pytest
from httpx import AsyncClient


# =============================================================================
# Transfer Tests
# =============================================================================

class TestTransferEndpoint:
    """Tests for POST /v1/transactions/transfer."""

    @pytest.mark.asyncio
    async def test_transfer_success(
        self,
        client: AsyncClient,
        student,
        classmate,
        student_headers: dict,
        classmate_headers: dict,
    ):
        response = await client.post(
            "/v1/transactions/transfer",
            json={"recipient_id": classmate.id, "amount_cents": 2_500, "note": "Pizza"},
            headers=student_headers,
        )

        assert response.status_code == 201
        data = response.json()
        assert data["kind"] == "transfer"
        assert data["amount_cents"] == 2_500
        assert data["from_account_id"] == student.id
        assert data["to_account_id"] == classmate.id
        assert data["note"] == "Pizza"
        assert data["created_at"].endswith("Z")

        me = (await client.get("/v1/accounts/me", headers=student_headers)).json()
        them = (await client.get("/v1/accounts/me", headers=classmate_headers)).json()
        assert me["balance_cents"] == 7_500
        assert them["balance_cents"] == 2_500

    @pytest.mark.asyncio
    async def test_transfer_insufficient_funds(
        self,
        client: AsyncClient,
        classmate,
        student_headers: dict,
    ):
        response = await client.post(
            "/v1/transactions/transfer",
            json={"recipient_id": classmate.id, "amount_cents": 10_001},
            headers=student_headers,
        )

        assert response.status_code == 402
        data = response.json()
        assert data["error"] == "INSUFFICIENT_FUNDS"
        assert data["message"] == "Insufficient funds"
        assert "request_id" in data

        history = (await client.get("/v1/transactions", headers=student_headers)).json()
        assert history["entries"] == []

    @pytest.mark.asyncio
    async def test_transfer_to_self_rejected(
        self,
        client: AsyncClient,
        student,
        student_headers: dict,
    ):
        response = await client.post(
            "/v1/transactions/transfer",
            json={"recipient_id": student.id, "amount_cents": 100},
            headers=student_headers,
        )

        assert response.status_code == 400
        assert response.json()["error"] == "INVALID_INPUT"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("amount", [0, -5])
    async def test_transfer_non_positive_amount(
        self,
        client: AsyncClient,
        classmate,
        student_headers: dict,
        amount: int,
    ):
        response = await client.post(
            "/v1/transactions/transfer",
            json={"recipient_id": classmate.id, "amount_cents": amount},
            headers=student_headers,
        )

        assert response.status_code == 400
        assert response.json()["error"] == "INVALID_INPUT"

    @pytest.mark.asyncio
    async def test_transfer_unknown_recipient(
        self,
        client: AsyncClient,
        student_headers: dict,
    ):
        response = await client.post(
            "/v1/transactions/transfer",
            json={"recipient_id": 9_999, "amount_cents": 100},
            headers=student_headers,
        )

        assert response.status_code == 404
        assert response.json()["error"] == "ACCOUNT_NOT_FOUND"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("recipient_id", [2_147_483_648, 10**20])
    async def test_transfer_recipient_beyond_id_range(
        self,
        client: AsyncClient,
        student_headers: dict,
        recipient_id: int,
    ):
        response = await client.post(
            "/v1/transactions/transfer",
            json={"recipient_id": recipient_id, "amount_cents": 100},
            headers=student_headers,
        )

        assert response.status_code == 400
        assert response.json()["error"] == "INVALID_INPUT"

    @pytest.mark.asyncio
    async def test_transfer_amount_beyond_range(
        self,
        client: AsyncClient,
        classmate,
        student_headers: dict,
    ):
        response = await client.post(
            "/v1/transactions/transfer",
            json={"recipient_id": classmate.id, "amount_cents": 10**20},
            headers=student_headers,
        )

        assert response.status_code == 400
        assert response.json()["error"] == "INVALID_INPUT"

    @pytest.mark.asyncio
    async def test_transfer_requires_caller(self, client: AsyncClient, classmate):
        response = await client.post(
            "/v1/transactions/transfer",
            json={"recipient_id": classmate.id, "amount_cents": 100},
        )

        assert response.status_code == 401
        assert response.json()["error"] == "UNAUTHENTICATED"

    @pytest.mark.asyncio
    async def test_transfer_malformed_caller(self, client: AsyncClient, classmate):
        response = await client.post(
            "/v1/transactions/transfer",
            json={"recipient_id": classmate.id, "amount_cents": 100},
            headers={"X-Account-ID": "Lion12"},
        )

        assert response.status_code == 401

    @pytest.mark.asyncio
    @pytest.mark.parametrize("caller", ["2147483648", "100000000000000000000"])
    async def test_transfer_caller_beyond_id_range(
        self,
        client: AsyncClient,
        classmate,
        caller: str,
    ):
        response = await client.post(
            "/v1/transactions/transfer",
            json={"recipient_id": classmate.id, "amount_cents": 100},
            headers={"X-Account-ID": caller},
        )

        assert response.status_code == 401
        assert response.json()["error"] == "UNAUTHENTICATED"

    @pytest.mark.asyncio
    async def test_request_id_echoed(
        self,
        client: AsyncClient,
        classmate,
        student_headers: dict,
    ):
        response = await client.post(
            "/v1/transactions/transfer",
            json={"recipient_id": classmate.id, "amount_cents": 99_999},
            headers={**student_headers, "X-Request-ID": "trace-123"},
        )

        assert response.headers["X-Request-ID"] == "trace-123"
        assert response.json()["request_id"] == "trace-123"


# =============================================================================
# Fine Tests
# =============================================================================

class TestFineEndpoint:
    """Tests for POST /v1/transactions/fine."""

    @pytest.mark.asyncio
    async def test_fine_success(
        self,
        client: AsyncClient,
        student,
        admin_headers: dict,
    ):
        response = await client.post(
            "/v1/transactions/fine",
            json={"target_id": student.id, "amount_cents": 1_500, "reason": "Late homework"},
            headers=admin_headers,
        )

        assert response.status_code == 201
        data = response.json()
        assert data["amount_levied_cents"] == 1_500
        assert data["amount_collected_cents"] == 1_500
        assert data["account"]["balance_cents"] == 8_500
        assert data["account"]["credit_score"] == 635
        assert data["entry"]["kind"] == "fine"
        assert data["entry"]["note"] == "Late homework"

    @pytest.mark.asyncio
    async def test_fine_on_empty_account(
        self,
        client: AsyncClient,
        classmate,
        admin_headers: dict,
    ):
        response = await client.post(
            "/v1/transactions/fine",
            json={"target_id": classmate.id, "amount_cents": 1_000, "reason": "Talking"},
            headers=admin_headers,
        )

        assert response.status_code == 201
        data = response.json()
        assert data["amount_collected_cents"] == 0
        assert data["entry"] is None
        assert data["account"]["balance_cents"] == 0
        assert data["account"]["credit_score"] == 635

    @pytest.mark.asyncio
    async def test_fine_by_student_forbidden(
        self,
        client: AsyncClient,
        classmate,
        student_headers: dict,
    ):
        response = await client.post(
            "/v1/transactions/fine",
            json={"target_id": classmate.id, "amount_cents": 100, "reason": "Revenge"},
            headers=student_headers,
        )

        assert response.status_code == 403
        assert response.json()["error"] == "FORBIDDEN"

    @pytest.mark.asyncio
    async def test_fine_requires_reason(
        self,
        client: AsyncClient,
        student,
        admin_headers: dict,
    ):
        response = await client.post(
            "/v1/transactions/fine",
            json={"target_id": student.id, "amount_cents": 100, "reason": "  "},
            headers=admin_headers,
        )

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_fine_target_beyond_id_range(
        self,
        client: AsyncClient,
        admin_headers: dict,
    ):
        response = await client.post(
            "/v1/transactions/fine",
            json={"target_id": 10**20, "amount_cents": 100, "reason": "Late"},
            headers=admin_headers,
        )

        assert response.status_code == 400
        assert response.json()["error"] == "INVALID_INPUT"


# =============================================================================
# History Tests
# =============================================================================

class TestTransactionHistory:
    """Tests for GET /v1/transactions."""

    @pytest.mark.asyncio
    async def test_history_newest_first(
        self,
        client: AsyncClient,
        student,
        classmate,
        student_headers: dict,
    ):
        for amount in (100, 200, 300):
            response = await client.post(
                "/v1/transactions/transfer",
                json={"recipient_id": classmate.id, "amount_cents": amount},
                headers=student_headers,
            )
            assert response.status_code == 201

        response = await client.get("/v1/transactions", headers=student_headers)

        assert response.status_code == 200
        data = response.json()
        assert data["account_id"] == student.id
        assert [e["amount_cents"] for e in data["entries"]] == [300, 200, 100]
        assert data["entries"][0]["note"] == "Money transfer"

    @pytest.mark.asyncio
    async def test_history_pagination(
        self,
        client: AsyncClient,
        classmate,
        student_headers: dict,
    ):
        for amount in (1, 2, 3):
            await client.post(
                "/v1/transactions/transfer",
                json={"recipient_id": classmate.id, "amount_cents": amount},
                headers=student_headers,
            )

        response = await client.get(
            "/v1/transactions",
            params={"limit": 1, "offset": 1},
            headers=student_headers,
        )

        assert [e["amount_cents"] for e in response.json()["entries"]] == [2]
