import io
from pathlib import Path

import httpx
from openpyxl import Workbook, load_workbook

STATIC_TEMPLATES = Path(__file__).resolve().parents[1] / "static" / "templates"


def _add(client, name, category, credits=2):
    return client.post("/courses", json={"name": name, "category": category, "credits": credits})


def test_root(client):
    assert client.get("/").json() == {"message": "Credit checker is running!"}


def test_requirements_roundtrip_and_clamping(client):
    assert client.get("/requirements").json() == {
        "specialized": 0,
        "generalEdu": 0,
        "obtainedSpecialized": 0,
        "obtainedGeneralEducation": 0,
    }

    r = client.put("/requirements", json={"specialized": 96, "obtainedGeneralEducation": -4})
    assert r.status_code == 200
    assert r.json()["specialized"] == 96
    assert r.json()["obtainedGeneralEducation"] == 0

    # 送らなかった項目は変わらない
    client.put("/requirements", json={"generalEdu": 30})
    body = client.get("/requirements").json()
    assert body["specialized"] == 96
    assert body["generalEdu"] == 30


def test_add_course_rejects_empty_name_or_negative_credits(client):
    for payload in (
        {"name": "   ", "category": "系科目_必須", "credits": 2},
        {"name": "x", "category": "系科目_必須", "credits": -1},
    ):
        r = client.post("/courses", json=payload)
        assert r.status_code == 400
        assert r.json()["detail"] == "入力不足または負の値です"

    assert client.get("/courses").json()["total"] == 0


def test_add_and_list_courses(client):
    r = _add(client, " 卒業研究 ", "コース科目_必須", 8)
    assert r.status_code == 200
    assert r.json()["name"] == "卒業研究"
    assert r.json()["required_mark"] is True
    assert r.json()["completed"] is False

    _add(client, "Machine Learning", {"group": "コース科目", "kind": "選択"})
    _add(client, "線形代数", "専門基礎科目_必須")

    body = client.get("/courses").json()
    assert body["total"] == 3
    assert [g["group"] for g in body["groups"]] == ["コース科目", "専門基礎科目"]
    assert [c["index"] for c in body["groups"][0]["courses"]] == [0, 1]
    assert body["groups"][0]["courses"][1]["category"] == "コース科目_選択"
    assert body["groups"][0]["courses"][1]["required_mark"] is False

    filtered = client.get("/courses", params={"keyword": "machine"}).json()
    assert [c["name"] for g in filtered["groups"] for c in g["courses"]] == ["Machine Learning"]


def test_toggle_mark_and_delete(client):
    _add(client, "A", "系科目_必須")
    _add(client, "B", "系科目_選択")
    _add(client, "C", "コース科目_必須")

    r = client.put("/courses/1/completed", json={"completed": True})
    assert r.json()["completed"] is True
    assert client.put("/courses/9/completed", json={"completed": True}).status_code == 404

    assert client.post("/courses/mark-required-complete").json()["changed"] == 2
    assert client.post("/courses/mark-required-complete").json()["changed"] == 0

    r = client.delete("/courses/0")
    assert r.json()["removed"] is True
    r = client.delete("/courses/42")
    assert r.status_code == 200
    assert r.json()["removed"] is False

    names = [c["name"] for g in client.get("/courses").json()["groups"] for c in g["courses"]]
    assert names == ["B", "C"]


def test_evaluation_report(client):
    client.put("/requirements", json={"specialized": 36, "generalEdu": 30, "obtainedGeneralEducation": 30})
    _add(client, "A", "専門基礎科目_必須", 10)
    _add(client, "B", "コース科目_選択", 20)
    _add(client, "C", "他コース科目_選択", 10)
    _add(client, "D", "系科目_必須", 2)
    for i in range(3):
        client.put(f"/courses/{i}/completed", json={"completed": True})

    r = client.post("/evaluation")
    assert r.status_code == 200
    body = r.json()
    assert body["required_warning"] == "必須科目が未チェックです：D"
    assert body["major"]["specialized_total"] == 36
    assert body["major"]["elective_check_total"] == 26
    assert body["major"]["passed"] is True
    assert body["graduation"] == {"total_credits": 66, "required_total": 126, "passed": False}

    other = next(c for c in body["major"]["categories"] if c["category"] == "他コース科目_選択")
    assert other == {"category": "他コース科目_選択", "label": "他コース選択", "total": 6, "min": 0, "max": 6, "capped": True}

    # 判定しても保存内容は変わらない
    assert client.get("/courses").json()["total"] == 4


def test_rules(client):
    body = client.get("/rules").json()
    assert body["elective_check_min"] == 16
    assert body["graduation_total"] == 126
    assert {l["category"] for l in body["elective_limits"]} == {
        "専門基礎科目_選択", "系科目_選択", "コース科目_選択", "他コース科目_選択",
    }


def test_load_bundled_template(client, serve_templates):
    def handler(request):
        path = STATIC_TEMPLATES / request.url.path.rsplit("/", 1)[-1]
        if not path.exists():
            return httpx.Response(404)
        return httpx.Response(200, content=path.read_bytes(), headers={"content-type": "application/json"})

    serve_templates(handler)
    _add(client, "old", "系科目_必須")

    r = client.post("/templates/info_engineering_2023/load")
    assert r.status_code == 200
    body = r.json()
    assert body["message"] == "学科テンプレートを読み込みました！"
    assert body["course_count"] == 14
    assert body["requirements"]["specialized"] == 96
    assert body["requirements"]["generalEdu"] == 30

    listing = client.get("/courses").json()
    names = [c["name"] for g in listing["groups"] for c in g["courses"]]
    assert "old" not in names
    assert [g["group"] for g in listing["groups"]] == ["専門基礎科目", "系科目", "コース科目", "他コース科目"]


def test_template_failure_keeps_state(client, serve_templates):
    serve_templates(lambda request: httpx.Response(500))
    client.put("/requirements", json={"specialized": 50})
    _add(client, "keep", "系科目_必須")

    r = client.post("/templates/info_engineering_2023/load")
    assert r.status_code == 502
    assert r.json()["detail"] == "テンプレートの読み込みに失敗しました"

    assert client.get("/requirements").json()["specialized"] == 50
    assert client.get("/courses").json()["total"] == 1


def test_template_with_bad_shape_is_a_failure(client, serve_templates):
    serve_templates(lambda request: httpx.Response(200, json={"categories": [{"name": "x"}]}))
    r = client.post("/templates/broken/load")
    assert r.status_code == 502


def test_export_then_import(client):
    _add(client, "線形代数", "専門基礎科目_必須", 2)
    _add(client, "機械学習", "コース科目_選択", 2)
    client.put("/courses/0/completed", json={"completed": True})

    r = client.get("/courses/export")
    assert r.status_code == 200
    assert r.headers["content-type"].startswith("application/vnd.openxmlformats")

    ws = load_workbook(io.BytesIO(r.content)).active
    rows = [[cell.value for cell in row] for row in ws.iter_rows()]
    assert rows[0] == ["科目名", "区分", "単位数", "修得済"]
    assert rows[1][:3] == ["線形代数", "専門基礎科目_必須", 2]
    assert rows[1][3] == "○"

    files = {"file": ("courses.xlsx", r.content, "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet")}
    body = client.post("/courses/import", files=files).json()
    assert body["inserted"] == 2
    assert body["total_after"] == 4

    courses = [c for g in client.get("/courses").json()["groups"] for c in g["courses"]]
    imported = [c for c in courses if c["index"] >= 2]
    assert [(c["name"], c["completed"]) for c in imported] == [("線形代数", True), ("機械学習", False)]


def test_import_skips_bad_rows(client):
    wb = Workbook()
    ws = wb.active
    ws.append(["科目名", "区分", "単位数", "修得済"])
    ws.append(["OK", "系科目_選択", 2, None])
    ws.append([None, "系科目_選択", 2, None])
    ws.append(["neg", "系科目_選択", -2, None])
    ws.append(["text", "系科目_選択", "two", None])
    buf = io.BytesIO()
    wb.save(buf)

    body = client.post("/courses/import", files={"file": ("c.xlsx", buf.getvalue())}).json()
    assert body["inserted"] == 1
    assert body["skipped"] == 3


def test_import_rejects_non_spreadsheet(client):
    r = client.post("/courses/import", files={"file": ("c.xlsx", b"not a spreadsheet")})
    assert r.status_code == 400
