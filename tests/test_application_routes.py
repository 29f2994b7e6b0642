from pymongo.errors import AutoReconnect

PAYLOAD = {
    "jobId": 123,
    "candidateId": 456,
    "resumeUrl": "https://example.com/resume.pdf",
    "email": "test@example.com",
    "phone": "1234567890",
}


def test_create_application(client, publisher):
    response = client.post("/applications", json=PAYLOAD)

    assert response.status_code == 201
    body = response.json()
    assert body["jobId"] == 123
    assert body["candidateId"] == 456
    assert body["resumeUrl"] == "https://example.com/resume.pdf"
    assert body["email"] == "test@example.com"
    assert body["phone"] == "1234567890"
    assert body["applicationId"]
    assert body["status"]["currentStage"] == "Applied"
    assert body["status"]["lastUpdated"]
    assert len(publisher.applications) == 1


def test_create_duplicate_returns_conflict(client, applications_collection):
    assert client.post("/applications", json=PAYLOAD).status_code == 201

    response = client.post("/applications", json=PAYLOAD)

    assert response.status_code == 409
    assert response.json() == {"detail": "candidate has already applied for this job"}
    assert len(applications_collection.documents) == 1


def test_create_missing_required_fields(client, applications_collection):
    response = client.post("/applications", json={"candidateId": 456})

    assert response.status_code == 400
    assert response.json() == {"detail": "JobID and CandidateID are required"}
    assert applications_collection.documents == []


def test_create_malformed_body(client):
    response = client.post("/applications", content=b"{oops", headers={"Content-Type": "application/json"})
    assert response.status_code == 400


def test_create_store_error(client, applications_collection):
    applications_collection.error = AutoReconnect("down")

    response = client.post("/applications", json=PAYLOAD)

    assert response.status_code == 500
    assert response.json() == {"detail": "Failed to create application"}


def test_create_succeeds_when_bus_is_down(client, publisher):
    publisher.fail = True

    response = client.post("/applications", json=PAYLOAD)

    assert response.status_code == 201
    assert response.json()["candidateId"] == 456


def test_get_applications_by_job(client):
    client.post("/applications", json=PAYLOAD)
    client.post("/applications", json={**PAYLOAD, "candidateId": 789})
    client.post("/applications", json={**PAYLOAD, "jobId": 999})

    response = client.get("/applications/job/123")

    assert response.status_code == 200
    assert sorted(a["candidateId"] for a in response.json()) == [456, 789]


def test_get_applications_by_job_empty(client):
    response = client.get("/applications/job/123")
    assert response.status_code == 200
    assert response.json() == []


def test_get_applications_by_job_invalid_id(client):
    assert client.get("/applications/job/invalid").status_code == 422


def test_get_applications_by_job_store_error(client, applications_collection):
    applications_collection.error = AutoReconnect("down")
    assert client.get("/applications/job/123").status_code == 500


def test_get_applications_by_candidate(client):
    client.post("/applications", json=PAYLOAD)
    client.post("/applications", json={**PAYLOAD, "jobId": 789})

    response = client.get("/applications/candidate/456")

    assert response.status_code == 200
    assert sorted(a["jobId"] for a in response.json()) == [123, 789]


def test_get_applications_by_candidate_store_error(client, applications_collection):
    applications_collection.error = AutoReconnect("down")

    response = client.get("/applications/candidate/456")

    assert response.status_code == 500
    assert response.json() == {"detail": "Failed to get applications"}


def test_get_application_by_id(client):
    created = client.post("/applications", json=PAYLOAD).json()

    response = client.get(f"/applications/{created['applicationId']}")

    assert response.status_code == 200
    assert response.json() == created


def test_get_application_not_found_is_empty_object(client):
    response = client.get("/applications/nonexistent")
    assert response.status_code == 200
    assert response.json() == {}


def test_create_with_object_id_is_rejected(client, applications_collection):
    client.post("/applications", json=PAYLOAD)

    response = client.post("/applications", json={**PAYLOAD, "jobId": {"$ne": None}})

    assert response.status_code == 400
    assert response.json() == {"detail": "JobID and CandidateID must be strings or numbers"}
    assert len(applications_collection.documents) == 1
