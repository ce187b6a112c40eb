from skillsync.config import settings


class TestProfile:
    def _auth(self, token):
        return {"x-auth-token": token}

    def test_get_profile(self, client, register):
        token, user = register(skills=["React"])
        r = client.get("/api/v1/profile", headers=self._auth(token))
        assert r.status_code == 200
        data = r.json()
        assert data["id"] == user["id"]
        assert data["skills"] == ["React"]
        assert data["avatar"] is None

    def test_update_fields(self, client, register):
        token, _ = register()
        r = client.put("/api/v1/profile", data={
            "name": "New Name",
            "bio": "Hello",
            "skills": "python, django ,",
        }, headers=self._auth(token))
        assert r.status_code == 200
        data = r.json()
        assert data["name"] == "New Name"
        assert data["bio"] == "Hello"
        assert data["skills"] == ["python", "django"]

    def test_upload_avatar_and_resume(self, client, register):
        token, _ = register()
        r = client.put(
            "/api/v1/profile",
            files={
                "avatar": ("me.jpg", b"jpeg bytes", "image/jpeg"),
                "resume": ("cv.docx", b"docx bytes", "application/octet-stream"),
            },
            headers=self._auth(token),
        )
        assert r.status_code == 200
        data = r.json()
        assert data["avatar"].startswith("/uploads/avatars/")
        assert data["resume"].startswith("/uploads/resumes/")
        assert client.get(data["resume"]).content == b"docx bytes"

    def test_replacing_uploads_removes_old_files(self, client, register):
        token, _ = register()
        first = client.put(
            "/api/v1/profile",
            files={
                "avatar": ("old.png", b"old avatar", "image/png"),
                "resume": ("old.pdf", b"old resume", "application/pdf"),
            },
            headers=self._auth(token),
        ).json()
        old_avatar = settings.upload_dir / first["avatar"][len("/uploads/"):]
        old_resume = settings.upload_dir / first["resume"][len("/uploads/"):]
        assert old_avatar.exists() and old_resume.exists()

        r = client.put(
            "/api/v1/profile",
            files={"avatar": ("new.png", b"new avatar", "image/png")},
            headers=self._auth(token),
        )
        assert r.status_code == 200
        assert client.get(r.json()["avatar"]).content == b"new avatar"
        assert not old_avatar.exists()
        assert old_resume.exists()

    def test_bad_avatar_leaves_profile_unchanged(self, client, register):
        token, _ = register()
        r = client.put(
            "/api/v1/profile",
            data={"name": "Changed"},
            files={"avatar": ("me.svg", b"<svg/>", "image/svg+xml")},
            headers=self._auth(token),
        )
        assert r.status_code == 400
        assert client.get("/api/v1/profile", headers=self._auth(token)).json()["name"] == "User 1"

    def test_skills_drive_recommendations(self, client, register):
        recruiter_token, _ = register(role="recruiter")
        client.post("/api/v1/jobs", json={
            "title": "ML", "company": "Lab", "location": "Remote", "salary": "-",
            "description": "-", "required_skills": ["python", "pytorch"],
        }, headers=self._auth(recruiter_token))
        token, _ = register()

        before = client.get("/api/v1/recommendations", headers=self._auth(token)).json()
        assert before[0]["match_percentage"] == 0

        client.put("/api/v1/profile", data={"skills": "Python"}, headers=self._auth(token))
        after = client.get("/api/v1/recommendations", headers=self._auth(token)).json()
        assert after[0]["match_percentage"] == 50

    def test_update_requires_auth(self, client):
        assert client.put("/api/v1/profile", data={"name": "x"}).status_code == 401


class TestUploads:
    def test_path_traversal_rejected(self, client):
        r = client.get("/uploads/../db.sqlite")
        assert r.status_code == 404

    def test_missing_file(self, client):
        assert client.get("/uploads/avatars/nothing.png").status_code == 404
