import csv
import io
import pytest
from httpx import AsyncClient
from question_bank.database import CURRENT_USER, QUESTIONS

class TestAuthIntegration:
    """Integration tests for authentication flow"""

    async def test_signin_me_signout_flow(self, client: AsyncClient, db):
        signin_response = await client.post("/auth/signin", json={"email": "professor@escola.com"})
        assert signin_response.status_code == 200
        data = signin_response.json()
        assert data["user"]["id"] == "1"
        assert data["user"]["role"] == "professor"
        assert db.get_current_user()["email"] == "professor@escola.com"

        headers = {"Authorization": f"Bearer {data['access_token']}"}
        me_response = await client.get("/auth/me", headers=headers)
        assert me_response.status_code == 200
        assert me_response.json()["name"] == "Professor"

        signout_response = await client.post("/auth/signout", headers=headers)
        assert signout_response.status_code == 200
        assert db.storage.get_item(CURRENT_USER) is None

    async def test_token_stops_working_after_signout(self, client: AsyncClient):
        signin_response = await client.post("/auth/signin", json={"email": "professor@escola.com"})
        headers = {"Authorization": f"Bearer {signin_response.json()['access_token']}"}
        assert (await client.get("/questions/", headers=headers)).status_code == 200

        await client.post("/auth/signout", headers=headers)

        response = await client.get("/questions/", headers=headers)
        assert response.status_code == 401

    async def test_signing_in_as_someone_else_ends_the_previous_session(self, client: AsyncClient):
        first = await client.post("/auth/signin", json={"email": "professor@escola.com"})
        await client.post("/auth/signin", json={"email": "coordenador@escola.com"})

        headers = {"Authorization": f"Bearer {first.json()['access_token']}"}
        response = await client.get("/auth/me", headers=headers)
        assert response.status_code == 401

    async def test_unknown_email(self, client: AsyncClient):
        response = await client.post("/auth/signin", json={"email": "ninguem@escola.com"})
        assert response.status_code == 404
        assert response.json()["detail"] == "Usuário não encontrado."

    async def test_protected_route_without_token(self, client: AsyncClient):
        response = await client.get("/auth/me")
        assert response.status_code == 401

class TestQuestionIntegration:
    """Integration tests for question operations"""

    async def test_list_seeded_questions(self, client: AsyncClient, professor, auth_headers):
        response = await client.get("/questions/", headers=auth_headers(professor))
        assert response.status_code == 200
        data = response.json()
        assert data["total"] == 3
        assert [q["id"] for q in data["questions"]] == ["1", "2", "3"]
        assert data["authors"] == ["Prof. João Silva", "Prof. Maria Santos"]
        assert "álgebra" in data["tags"]

    async def test_list_with_filters(self, client: AsyncClient, professor, auth_headers):
        response = await client.get(
            "/questions/",
            params={"author": "Prof. João Silva", "tags": ["brasil"]},
            headers=auth_headers(professor),
        )
        data = response.json()
        assert [q["id"] for q in data["questions"]] == ["3"]
        # Facets always describe the whole bank
        assert data["authors"] == ["Prof. João Silva", "Prof. Maria Santos"]

    async def test_create_question_flow(self, client: AsyncClient, db, professor, auth_headers, question_data):
        headers = auth_headers(professor)

        create_response = await client.post("/questions/", json=question_data, headers=headers)
        assert create_response.status_code == 201
        created = create_response.json()
        assert created["authorId"] == "1"
        assert created["authorName"] == "Professor"
        assert created["createdAt"]
        assert created["correctOption"] == 2

        get_response = await client.get(f"/questions/{created['id']}", headers=headers)
        assert get_response.status_code == 200
        assert get_response.json() == created
        assert len(db.select(QUESTIONS)) == 4

    async def test_blank_option_is_rejected_without_mutation(self, client: AsyncClient, db, professor, auth_headers, question_data):
        before = db.select(QUESTIONS)
        question_data["options"][3] = ""

        response = await client.post("/questions/", json=question_data, headers=auth_headers(professor))
        assert response.status_code == 400
        assert response.json()["detail"] == "Por favor, preencha todos os campos obrigatórios"
        assert db.select(QUESTIONS) == before

    async def test_edit_keeps_identity_and_author(self, client: AsyncClient, coordinator, auth_headers, question_data):
        response = await client.put("/questions/1", json=question_data, headers=auth_headers(coordinator))
        assert response.status_code == 200
        edited = response.json()
        assert edited["id"] == "1"
        assert edited["authorName"] == "Prof. João Silva"
        assert edited["createdAt"] == "2024-01-15T10:30:00Z"
        assert edited["statement"] == question_data["statement"]

    async def test_delete_question(self, client: AsyncClient, db, professor, auth_headers):
        headers = auth_headers(professor)
        response = await client.delete("/questions/2", headers=headers)
        assert response.status_code == 200
        assert [q["id"] for q in db.select(QUESTIONS)] == ["1", "3"]

        missing = await client.delete("/questions/2", headers=headers)
        assert missing.status_code == 404

class TestExportIntegration:
    """Integration tests for CSV export"""

    async def test_export_filtered_questions(self, client: AsyncClient, professor, auth_headers):
        response = await client.get(
            "/questions/export", params={"category": "Matemática"}, headers=auth_headers(professor)
        )
        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/csv")
        assert 'filename="questoes_' in response.headers["content-disposition"]

        text = response.content.decode("utf-8")
        assert text.startswith("\ufeff")
        rows = list(csv.reader(io.StringIO(text[1:])))
        assert len(rows) == 2
        assert rows[1][0] == "1"
        assert rows[1][10] == "B"

    async def test_export_nothing(self, client: AsyncClient, professor, auth_headers):
        response = await client.get("/questions/export", params={"text": "no such text"}, headers=auth_headers(professor))
        assert response.status_code == 400

class TestCategoryAndEditorIntegration:
    async def test_ad_hoc_category(self, client: AsyncClient, professor, auth_headers):
        headers = auth_headers(professor)
        response = await client.post("/categories/", json={"name": "Física"}, headers=headers)
        assert response.status_code == 201

        listing = await client.get("/categories/", headers=headers)
        assert "Física" in [c["name"] for c in listing.json()]

    async def test_blank_category(self, client: AsyncClient, professor, auth_headers):
        response = await client.post("/categories/", json={"name": "  "}, headers=auth_headers(professor))
        assert response.status_code == 400

    async def test_format(self, client: AsyncClient, professor, auth_headers):
        response = await client.post(
            "/editor/format",
            json={"statement": "abc", "start": 1, "end": 2, "format": "italic"},
            headers=auth_headers(professor),
        )
        assert response.json()["statement"] == "a<em>b</em>c"

    @pytest.mark.parametrize("start,end", [(-1, 2), (0, -3)])
    async def test_format_negative_offsets(self, client: AsyncClient, professor, auth_headers, start, end):
        response = await client.post(
            "/editor/format",
            json={"statement": "abc", "start": start, "end": end, "format": "bold"},
            headers=auth_headers(professor),
        )
        assert response.status_code == 422

    async def test_image_url(self, client: AsyncClient, professor, auth_headers):
        response = await client.post(
            "/editor/image-url",
            json={"statement": "Veja", "url": "https://example.com/a.png"},
            headers=auth_headers(professor),
        )
        assert '<img src="https://example.com/a.png"' in response.json()["statement"]

    async def test_upload_png(self, client: AsyncClient, professor, auth_headers):
        response = await client.post(
            "/editor/image-upload",
            data={"statement": "Veja"},
            files={"file": ("figura.png", b"\x89PNG" + b"\x00" * (2 * 1024 * 1024), "image/png")},
            headers=auth_headers(professor),
        )
        assert response.status_code == 200
        statement = response.json()["statement"]
        assert statement.startswith("Veja")
        assert statement.count("<img") == 1
        assert 'src="data:image/png;base64,' in statement

    async def test_upload_too_large(self, client: AsyncClient, professor, auth_headers):
        response = await client.post(
            "/editor/image-upload",
            data={"statement": "Veja"},
            files={"file": ("figura.png", b"\x00" * (6 * 1024 * 1024), "image/png")},
            headers=auth_headers(professor),
        )
        assert response.status_code == 400
        assert response.json()["detail"] == "A imagem deve ter no máximo 5MB."

    async def test_upload_with_content_type_parameters(self, client: AsyncClient, professor, auth_headers):
        response = await client.post(
            "/editor/image-upload",
            data={"statement": ""},
            files={"file": ("figura.png", b"\x89PNG", "image/png; name=figura")},
            headers=auth_headers(professor),
        )
        assert response.status_code == 200
        assert 'src="data:image/png;base64,' in response.json()["statement"]
