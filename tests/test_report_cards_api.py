from models.grades import Grade as GradeModel
from routers import pdf_reports

TEACHER_HEADERS = {"X-User-Id": "t-1", "X-User-Role": "teacher"}


def test_class_report_cards_endpoint(client, school):
    resp = client.get(f"/v1/report-cards/{school['class'].id}", params={"trimester": 1}, headers=TEACHER_HEADERS)
    assert resp.status_code == 200
    assert "X-Latency-Ms" in resp.headers

    body = resp.json()
    assert body["success"] is True
    data = body["data"]
    assert data["header"]["school_name"] == "GROUPE SCOLAIRE FLORA"
    assert data["header"]["trimester"] == 1
    assert [r["student"]["last_name"] for r in data["reports"]] == ["Bernard", "Dubois", "Martin"]
    assert [r["rank"] for r in data["reports"]] == [1, 3, 2]
    assert data["reports"][2]["trimester_average"] == 14.8


def test_class_report_cards_ordered_by_rank(client, school):
    resp = client.get(f"/v1/report-cards/{school['class'].id}",
                      params={"trimester": 1, "order": "rank"}, headers=TEACHER_HEADERS)
    assert [r["rank"] for r in resp.json()["data"]["reports"]] == [1, 2, 3]


def test_student_report_card_endpoint(client, school):
    resp = client.get(f"/v1/report-cards/{school['class'].id}/students/{school['hugo'].id}",
                      params={"trimester": 1, "school_year": "2025-2026"}, headers=TEACHER_HEADERS)
    assert resp.status_code == 200
    data = resp.json()["data"]
    assert data["header"]["school_year"] == "2025-2026"
    assert data["report"]["trimester_average"] == 9.6
    assert data["report"]["is_passing"] is False
    assert data["report"]["general_appreciation"] == "Résultats insuffisants - Doit redoubler d'efforts"


def test_report_cards_require_requester_headers(client, school):
    resp = client.get(f"/v1/report-cards/{school['class'].id}", params={"trimester": 1})
    assert resp.status_code == 401


def test_report_cards_forbidden_for_students(client, school):
    headers = {"X-User-Id": "s-1", "X-User-Role": "student"}
    resp = client.get(f"/v1/report-cards/{school['class'].id}", params={"trimester": 1}, headers=headers)
    assert resp.status_code == 403


def test_unknown_class_returns_404(client, school):
    resp = client.get("/v1/report-cards/999", params={"trimester": 1}, headers=TEACHER_HEADERS)
    assert resp.status_code == 404
    assert resp.json()["error"]["code"] == "NOT_FOUND"


def test_invalid_trimester_is_rejected(client, school):
    resp = client.get(f"/v1/report-cards/{school['class'].id}", params={"trimester": 4}, headers=TEACHER_HEADERS)
    assert resp.status_code == 422


def test_invalid_max_score_returns_data_integrity_error(client, db, school):
    db.add(GradeModel(student_id=school["lea"].id, course_id=school["math_course"].id,
                      score=5, max_score=0, coefficient=1, trimester=1))
    db.commit()

    resp = client.get(f"/v1/report-cards/{school['class'].id}", params={"trimester": 1}, headers=TEACHER_HEADERS)
    assert resp.status_code == 422
    body = resp.json()
    assert body["success"] is False
    assert body["error"]["code"] == "DATA_INTEGRITY_ERROR"
    assert len(body["error"]["details"]) == 1


def test_student_report_card_pdf(client, school, monkeypatch):
    rendered = {}

    def fake_pdf(html):
        rendered["html"] = html
        return b"%PDF-1.7 fake"

    monkeypatch.setattr(pdf_reports.pdf_service, "_html_to_pdf", fake_pdf)
    resp = client.post(f"/v1/pdf/report-card/{school['class'].id}/{school['lea'].id}",
                       params={"trimester": 1}, headers=TEACHER_HEADERS)

    assert resp.status_code == 200
    assert resp.headers["content-type"] == "application/pdf"
    assert 'filename="Bulletin_Martin_Lea_T1.pdf"' in resp.headers["content-disposition"]
    assert resp.content == b"%PDF-1.7 fake"
    assert "Rang: 2/3" in rendered["html"]


def test_class_report_cards_pdf(client, school, monkeypatch):
    monkeypatch.setattr(pdf_reports.pdf_service, "_html_to_pdf", lambda html: html.encode("utf-8"))
    resp = client.post(f"/v1/pdf/report-cards/{school['class'].id}",
                       params={"trimester": 1}, headers=TEACHER_HEADERS)

    assert resp.status_code == 200
    assert 'filename="Bulletins_6eme_A_T1.pdf"' in resp.headers["content-disposition"]
    html = resp.content.decode("utf-8")
    assert html.count('class="page"') == 3


def test_pdf_export_forbidden_for_educator(client, school):
    headers = {"X-User-Id": "e-1", "X-User-Role": "educator"}
    resp = client.post(f"/v1/pdf/report-cards/{school['class'].id}", params={"trimester": 1}, headers=headers)
    assert resp.status_code == 403


def test_academic_config(client):
    resp = client.get("/v1/config/academic")
    assert resp.status_code == 200
    data = resp.json()["data"]
    assert data["trimester"] in (1, 2, 3)
    assert len(data["school_year"]) == 9
