from __future__ import annotations

import time
from types import SimpleNamespace

import pytest

from config import testing
from fakes import FakeCamera, FakeGeolocation
from timeclock.main import create_app


def make_settings(**overrides):
    values = {k: v for k, v in vars(testing).items() if k.isupper()}
    values.update(overrides)
    return SimpleNamespace(**values)


@pytest.fixture
def make_client():
    apps = []

    def _make(**overrides):
        camera = FakeCamera()
        app = create_app(settings=make_settings(**overrides), camera=camera, geolocation=FakeGeolocation())
        apps.append(app)
        return app.test_client(), app.extensions["timeclock"], camera

    yield _make
    for app in apps:
        app.extensions["timeclock"].shutdown()


def punch_through_kiosk(client, container, employee_id="c2", direction="ENTRADA"):
    resp = client.post("/api/ponto/direction", json={"direction": direction})
    assert resp.status_code == 200
    resp = client.post("/api/ponto/employee", json={"employee_id": employee_id})
    assert resp.status_code == 200
    container.runtime.run(container.workflow.settle())
    return client.post("/api/ponto/confirm")


def test_kiosk_flow_registers_a_facial_punch(make_client):
    client, container, camera = make_client()

    resp = client.post("/api/ponto/direction", json={"direction": "ENTRADA"})
    state = resp.get_json()["state"]
    assert state["step"] == "SELECT_EMPLOYEE"
    assert [e["id"] for e in state["employees"]] == ["c1", "c2", "c3"]

    resp = client.post("/api/ponto/search", json={"term": "maria"})
    assert [e["nome"] for e in resp.get_json()["employees"]] == ["Maria Silva"]

    resp = client.post("/api/ponto/employee", json={"employee_id": "c2"})
    assert resp.get_json()["state"]["step"] == "CAPTURING"
    container.runtime.run(container.workflow.settle())

    state = client.get("/api/ponto/state").get_json()["state"]
    assert state["can_confirm"] is True
    assert state["location"] == {"latitude": -8.8383, "longitude": 13.2344}

    body = client.post("/api/ponto/confirm").get_json()
    assert body["success"] is True
    assert body["punch"]["tipo"] == "ENTRADA"
    assert body["punch"]["colaborador_id"] == "c2"
    assert body["punch"]["metodo"] == "FACIAL"
    assert body["state"]["step"] == "COMPLETED"
    assert body["state"]["message"]["type"] == "success"
    assert camera.streams[0].stop_calls == 1

    # result stays on screen until the reset delay
    assert client.post("/api/ponto/confirm").get_json()["success"] is False

    history = client.get("/api/rh/movimentos").get_json()["movimentos"]
    assert len(history) == 1
    assert "foto_captura" not in history[0]

    time.sleep(0.8)
    assert client.get("/api/ponto/state").get_json()["state"]["step"] == "SELECT_DIRECTION"


def test_kiosk_rejects_bad_input_and_out_of_order_calls(make_client):
    client, _, _ = make_client()

    assert client.post("/api/ponto/direction", json={"direction": "PAUSA"}).status_code == 400
    assert client.post("/api/ponto/employee", json={"employee_id": "c1"}).status_code == 409

    client.post("/api/ponto/direction", json={"direction": "SAIDA"})
    assert client.post("/api/ponto/direction", json={"direction": "SAIDA"}).status_code == 409
    assert client.post("/api/ponto/employee", json={"employee_id": "c404"}).status_code == 404
    assert client.post("/api/ponto/employee", json={}).status_code == 400

    resp = client.post("/api/ponto/cancel")
    assert resp.get_json()["state"]["step"] == "SELECT_DIRECTION"


def test_preview_requires_a_live_stream(make_client):
    client, _, _ = make_client()
    assert client.get("/ponto/preview.mjpg").status_code == 404


def test_inactive_employee_is_not_offered_on_the_kiosk(make_client):
    client, _, _ = make_client()
    client.post("/api/rh/colaboradores/c3/estado")

    state = client.post("/api/ponto/direction", json={"direction": "ENTRADA"}).get_json()["state"]
    assert [e["id"] for e in state["employees"]] == ["c1", "c2"]


def test_role_without_permission_gets_403(make_client):
    client, _, _ = make_client()

    assert client.post("/api/session/role", json={"role": "Gestor"}).status_code == 200
    assert client.get("/api/me").get_json()["role"] == "Gestor"
    assert client.get("/api/ponto/state").status_code == 403
    assert client.get("/api/rh/ferias").status_code == 200

    client.post("/api/session/role", json={"role": "Operador"})
    assert client.get("/api/ponto/state").status_code == 200
    assert client.get("/api/rh/colaboradores").status_code == 403
    assert client.get("/api/acl").status_code == 403

    assert client.post("/api/session/role", json={"role": "Root"}).status_code == 400


def test_acl_update_takes_effect(make_client):
    client, _, _ = make_client()

    acl = client.get("/api/acl").get_json()["acl"]
    for entry in acl:
        if entry["role"] == "Gestor":
            entry["permissions"].append("VIEW_TIMECLOCK")
    assert client.put("/api/acl", json=acl).status_code == 200

    client.post("/api/session/role", json={"role": "Gestor"})
    assert client.get("/api/ponto/state").status_code == 200
    assert client.put("/api/acl", json={"acl": "nope"}).status_code == 403


def test_idle_session_locks_with_423_and_releases_the_camera(make_client):
    client, container, camera = make_client(INACTIVITY_TIMEOUT_SECONDS=0.3)

    client.post("/api/ponto/direction", json={"direction": "ENTRADA"})
    client.post("/api/ponto/employee", json={"employee_id": "c1"})
    container.runtime.run(container.workflow.settle())
    assert client.post("/api/session/activity", json={"event": "keydown"}).get_json()["reset"] is True

    time.sleep(0.5)
    assert client.get("/api/session/lock").get_json()["locked"] is True

    resp = client.get("/api/ponto/state")
    assert resp.status_code == 423
    assert resp.get_json()["locked"] is True
    assert camera.streams[0].stop_calls == 1

    assert client.post("/api/session/activity", json={"event": "click"}).get_json()["reset"] is False
    assert client.post("/api/session/activity", json={"event": "blink"}).status_code == 400

    assert client.post("/api/session/unlock").get_json()["locked"] is False
    assert client.get("/api/ponto/state").get_json()["state"]["step"] == "SELECT_DIRECTION"


def test_hr_employee_admin(make_client):
    client, _, _ = make_client()

    resp = client.post(
        "/api/rh/colaboradores",
        json={"nome": "Ana Costa", "email": "ana@mdv.ao", "cargo": "Contabilista", "departamento": "Finanças"},
    )
    assert resp.status_code == 201
    assert resp.get_json()["colaborador"]["id"] == "c4"

    assert client.post("/api/rh/colaboradores", json={"nome": ""}).status_code == 400
    assert client.post("/api/rh/colaboradores/c4/biometria", json={"image_data": "lixo"}).status_code == 400


def test_manual_punch_and_daily_summary(make_client):
    client, container, _ = make_client()

    resp = client.post("/api/rh/movimentos", json={"colaborador_id": "c1", "tipo": "SAIDA"})
    assert resp.status_code == 201
    assert resp.get_json()["movimento"]["metodo"] == "MANUAL"

    assert punch_through_kiosk(client, container, "c1").get_json()["success"] is True

    summary = client.get("/api/rh/movimentos/resumo").get_json()["resumo"]
    assert summary["total_movimentos"] == 2
    assert summary["colaboradores_distintos"] == 1

    assert len(client.get("/api/rh/movimentos?colaborador_id=c2").get_json()["movimentos"]) == 0
    assert client.get("/api/rh/movimentos?limit=abc").status_code == 400
    assert client.get("/api/rh/movimentos/resumo?data=02-05-2024").status_code == 400


def test_leave_approval_circuit(make_client):
    client, _, _ = make_client()

    resp = client.post(
        "/api/rh/ausencias",
        json={
            "colaborador_id": "c3",
            "data_inicio": "2024-04-02",
            "data_fim": "2024-04-03",
            "tipo": "FAMILIA",
            "motivo": "Assistência familiar",
        },
    )
    assert resp.status_code == 201
    absence_id = resp.get_json()["ausencia"]["id"]

    pending = client.get("/api/rh/ausencias?estado=PENDENTE").get_json()["ausencias"]
    assert [a["id"] for a in pending] == [absence_id]

    resp = client.post(f"/api/rh/ausencias/{absence_id}/decisao", json={"estado": "APROVADO"})
    assert resp.get_json()["ausencia"]["estado"] == "APROVADO"
    assert client.post(f"/api/rh/ausencias/{absence_id}/decisao", json={"estado": "REJEITADO"}).status_code == 400

    resp = client.post("/api/rh/ferias/f1/decisao", json={"estado": "REJEITADO"})
    assert resp.get_json()["pedido"]["estado"] == "REJEITADO"


def test_unknown_hr_records_answer_404(make_client):
    client, _, _ = make_client()

    assert client.post("/api/rh/colaboradores/c999/estado").status_code == 404
    resp = client.post("/api/rh/colaboradores/c999/biometria", json={"image_data": "lixo"})
    assert resp.status_code == 404
    assert resp.get_json()["success"] is False

    assert client.post("/api/rh/movimentos", json={"colaborador_id": "c999", "tipo": "ENTRADA"}).status_code == 404
    absence = {"colaborador_id": "c999", "data_inicio": "2024-04-02", "data_fim": "2024-04-02", "motivo": "x"}
    assert client.post("/api/rh/ausencias", json=absence).status_code == 404
    assert client.post("/api/rh/ausencias/a999/decisao", json={"estado": "APROVADO"}).status_code == 404
    assert client.post("/api/rh/ferias/f999/decisao", json={"estado": "APROVADO"}).status_code == 404


@pytest.mark.parametrize("limit", ["0", "-1"])
def test_history_rejects_non_positive_limit(make_client, limit):
    client, _, _ = make_client()
    for _ in range(3):
        client.post("/api/rh/movimentos", json={"colaborador_id": "c1", "tipo": "ENTRADA"})

    assert client.get(f"/api/rh/movimentos?limit={limit}").status_code == 400
    assert client.get(f"/api/rh/movimentos?colaborador_id=c1&limit={limit}").status_code == 400
    assert len(client.get("/api/rh/movimentos?limit=3").get_json()["movimentos"]) == 3


def test_history_can_include_the_capture_photo(make_client):
    client, container, _ = make_client()
    assert punch_through_kiosk(client, container, "c1").get_json()["success"] is True

    [plain] = client.get("/api/rh/movimentos").get_json()["movimentos"]
    assert "foto_captura" not in plain

    [with_photo] = client.get("/api/rh/movimentos?com_foto=1").get_json()["movimentos"]
    assert with_photo["foto_captura"].startswith("data:image/jpeg;base64,")
