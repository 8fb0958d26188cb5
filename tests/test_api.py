import inspect


def start(client, auth, topic_id):
    r = client.post("/assessment/start", headers=auth, json={"topicId": topic_id})
    assert r.status_code == 200, r.text
    return r.json()

def answer_all(client, auth, data, ratings):
    it = iter(ratings)
    while data["phase"] == "IN_ASSESSMENT":
        kind = data["session"]["question"]["kind"]
        if kind == "scaling":
            body = {"rating": next(it), "elaboration": "roughly"}
        elif kind == "closed":
            body = {"choice": "Yes"}
        else:
            body = {"value": "a thoughtful answer"}
        r = client.post("/assessment/answer", headers=auth, json=body)
        assert r.status_code == 200, r.text
        data = r.json()
    return data


def test_health_and_version(client):
    assert client.get("/health").json() == {"ok": True}
    assert "version" in client.get("/version").json()


def test_requires_token(client):
    r = client.post("/assessment/start", json={"topicId": "stress"})
    assert r.status_code == 401


def test_topics(client):
    r = client.get("/assessment/topics")
    assert r.status_code == 200
    ids = [t["id"] for t in r.json()]
    assert len(ids) == 10
    assert "stress" in ids


def test_stress_flow_and_accept(client, auth, user_id):
    data = start(client, auth, "stress")
    assert data["session"]["position"] == 0
    assert data["session"]["total"] == 10

    data = answer_all(client, auth, data, [2, 3, 4])
    assert data["phase"] == "PLAN_READY"
    plan = data["plan"]
    assert plan["severity"] == "mild"
    assert plan["durationDays"] == 7
    assert [r["moduleId"] for r in plan["recommendations"]] == ["stress", "mindfulness", "music", "art"]
    assert [r["priority"] for r in plan["recommendations"]] == [1, 2, 3, 4]

    r = client.post("/assessment/plan/accept", headers=auth)
    assert r.status_code == 200, r.text
    body = r.json()
    assert body["plan"]["id"] == plan["id"]
    assert body["navigateTo"] == "/therapy-modules"

    progress = client.get("/assessment/progress", headers=auth).json()
    assert progress["userId"] == user_id
    assert progress["currentPlan"]["id"] == plan["id"]
    assert progress["completedTherapies"] == []
    assert progress["dailyProgress"] == {}

    assert client.get("/assessment/state", headers=auth).json()["phase"] == "IDLE"


def test_structured_answers_are_encoded(client, auth):
    start(client, auth, "anxiety-disorders")
    client.post("/assessment/answer", headers=auth, json={"value": "before exams"})
    client.post("/assessment/answer", headers=auth, json={"value": "racing thoughts"})
    r = client.post("/assessment/answer", headers=auth, json={"choice": "Yes", "elaboration": "sweaty palms"})
    assert r.status_code == 200
    assert r.json()["meta"]["answers"]["3"] == "Yes - sweaty palms"


def test_rating_on_free_text_question_rejected(client, auth):
    start(client, auth, "depression")
    r = client.post("/assessment/answer", headers=auth, json={"rating": 4})
    assert r.status_code == 422
    r = client.post("/assessment/answer", headers=auth, json={"rating": 11})
    assert r.status_code == 422


def test_empty_answer(client, auth):
    start(client, auth, "depression")
    r = client.post("/assessment/answer", headers=auth, json={"value": "   "})
    assert r.status_code == 422
    assert r.json()["detail"]["code"] == "EMPTY_ANSWER"
    assert client.get("/assessment/state", headers=auth).json()["session"]["position"] == 0


def test_previous(client, auth):
    start(client, auth, "insomnia")
    r = client.post("/assessment/previous", headers=auth)
    assert r.status_code == 409
    assert r.json()["detail"]["code"] == "AT_START"

    client.post("/assessment/answer", headers=auth, json={"value": "restless"})
    r = client.post("/assessment/previous", headers=auth)
    assert r.status_code == 200
    view = r.json()["session"]
    assert view["position"] == 0
    assert view["prefill"] == "restless"


def test_answer_while_idle(client, auth):
    r = client.post("/assessment/answer", headers=auth, json={"value": "hello"})
    assert r.status_code == 409
    assert r.json()["detail"]["code"] == "INVALID_STATE"


def test_unknown_topic(client, auth):
    r = client.post("/assessment/start", headers=auth, json={"topicId": "astrology"})
    assert r.status_code == 404
    assert r.json()["detail"]["code"] == "UNKNOWN_TOPIC"


def test_defer(client, auth):
    data = start(client, auth, "trauma")
    data = answer_all(client, auth, data, [8, 8])
    assert data["plan"]["severity"] == "severe"
    r = client.post("/assessment/plan/defer", headers=auth)
    assert r.status_code == 200
    assert r.json()["phase"] == "IDLE"
    assert client.get("/assessment/progress", headers=auth).status_code == 404


def test_chat_keyword_reply(client, auth):
    r = client.post("/chat/message", headers=auth, json={"message": "I need help"})
    assert r.status_code == 200
    body = r.json()
    assert "start an assessment" in body["reply"]
    assert [m["role"] for m in body["messages"]] == ["user", "bot"]

    history = client.get("/chat/messages", headers=auth).json()["messages"]
    assert history[0]["text"].startswith("Hello")
    assert history[-1]["text"] == body["reply"]


def test_config_route_removed(client):
    assert client.get("/config/app").status_code == 404


def test_oversized_answer_rejected(client, auth):
    start(client, auth, "depression")
    r = client.post("/assessment/answer", headers=auth, json={"value": "x" * 2001})
    assert r.status_code == 422
    r = client.post("/assessment/answer", headers=auth, json={"value": "fine", "elaboration": "x" * 2001})
    assert r.status_code == 422
    # nothing was stored
    view = client.get("/assessment/state", headers=auth).json()["session"]
    assert view["position"] == 0


def test_oversized_chat_message_rejected(client, auth):
    r = client.post("/chat/message", headers=auth, json={"message": "x" * 2001})
    assert r.status_code == 422


def test_state_routes_run_on_the_event_loop():
    # threadpool routes could interleave with answer between load and save
    from mindcare.api.routes import assessment as assessment_routes, chat as chat_routes
    for fn in (
        assessment_routes.get_state,
        assessment_routes.start,
        assessment_routes.answer,
        assessment_routes.previous,
        assessment_routes.accept,
        assessment_routes.defer,
        chat_routes.message,
        chat_routes.history,
    ):
        assert inspect.iscoroutinefunction(fn), fn.__name__
