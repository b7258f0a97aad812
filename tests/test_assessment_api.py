from codehelper.services.seeding import ASSESSMENT_QUESTIONS


def _questions(client, headers, **params):
    return client.get("/api/assessment/questions", params=params, headers=headers).json()


def _submit(client, headers, kind, answers, confidence=3):
    return client.post(
        "/api/assessment",
        json={"type": kind, "confidence": confidence, "answers": answers},
        headers=headers,
    )


def test_questions_hide_answers(client, headers):
    questions = _questions(client, headers, limit=50)
    assert len(questions) == len(ASSESSMENT_QUESTIONS)
    assert all("correct_answer" not in q for q in questions)


def test_language_filter_keeps_agnostic_questions(client, headers):
    questions = _questions(client, headers, language="python", limit=50)
    assert {q["language"] for q in questions} == {"python", None}


def test_pre_assessment_scores_and_unlocks(client, headers):
    by_text = {q["question"]: q for q in ASSESSMENT_QUESTIONS}
    questions = _questions(client, headers, difficulty="beginner", limit=3)
    answers = [
        {"question_id": q["id"], "answer": by_text[q["question"]]["correct_answer"].upper() + "  "}
        for q in questions[:2]
    ]
    answers.append({"question_id": questions[2]["id"], "answer": "wrong"})

    r = _submit(client, headers, "pre", answers)
    assert r.status_code == 201
    result = r.json()
    assert result["score"] == 2
    assert result["total_questions"] == 3

    status = client.get("/api/onboarding/status", headers=headers).json()
    assert status["pre_assessment_completed"] is True


def test_pre_assessment_only_once(client, onboarded_headers):
    questions = _questions(client, onboarded_headers, limit=1)
    r = _submit(client, onboarded_headers, "pre", [{"question_id": questions[0]["id"], "answer": "x"}])
    assert r.status_code == 412


def test_post_assessment_requires_pre(client, headers, settings):
    settings.post_assessment_min_minutes = 0
    questions = _questions(client, headers, limit=1)
    r = _submit(client, headers, "post", [{"question_id": questions[0]["id"], "answer": "x"}])
    assert r.status_code == 412


def test_post_assessment_waits_for_eligibility(client, onboarded_headers):
    questions = _questions(client, onboarded_headers, limit=1)
    r = _submit(client, onboarded_headers, "post", [{"question_id": questions[0]["id"], "answer": "x"}])
    assert r.status_code == 412

    eligibility = client.get("/api/assessment/post-eligibility", headers=onboarded_headers).json()
    assert eligibility["is_eligible"] is False
    assert eligibility["min_minutes_required"] == 30
    assert eligibility["progress_percentage"] == 0
    assert eligibility["message"] == "Complete 30 more minutes to unlock post-assessment"
    assert eligibility["has_post_assessment"] is False


def test_post_assessment_once_when_eligible(client, onboarded_headers, settings):
    settings.post_assessment_min_minutes = 0
    questions = _questions(client, onboarded_headers, limit=1)
    answers = [{"question_id": questions[0]["id"], "answer": "x"}]
    assert _submit(client, onboarded_headers, "post", answers).status_code == 201
    assert _submit(client, onboarded_headers, "post", answers).status_code == 412

    history = client.get("/api/assessment", headers=onboarded_headers).json()
    assert [a["type"] for a in history] == ["post", "pre"]
    eligibility = client.get("/api/assessment/post-eligibility", headers=onboarded_headers).json()
    assert eligibility["has_post_assessment"] is True


def test_submission_validation(client, headers):
    assert _submit(client, headers, "pre", []).status_code == 422
    assert _submit(client, headers, "mid", [{"question_id": "q", "answer": "a"}]).status_code == 422
    assert _submit(client, headers, "pre", [{"question_id": "q", "answer": "a"}], confidence=0).status_code == 422


def test_unknown_question_scores_zero(client, headers):
    r = _submit(client, headers, "pre", [{"question_id": "missing", "answer": "a"}])
    assert r.status_code == 201
    assert r.json()["score"] == 0
