from otelop.annotations import annotations, config_sha256, pod_annotations

TEST_SHA = "9f86d081884c7d659a2feaa0c55ad015a3bf4f1b2b0b822cd15d6c15b0f00a08"
EMPTY_SHA = "e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855"
SHA_KEY = "opentelemetry-operator-config/sha256"


def test_default_annotations():
    result = annotations(None, "test")
    pod = pod_annotations(None, "test")

    assert result["prometheus.io/scrape"] == "true"
    assert result["prometheus.io/port"] == "8888"
    assert result["prometheus.io/path"] == "/metrics"
    assert result[SHA_KEY] == TEST_SHA
    assert pod[SHA_KEY] == TEST_SHA


def test_user_annotations():
    user = {
        "prometheus.io/scrape": "false",
        "prometheus.io/port": "1234",
        "prometheus.io/path": "/test",
        SHA_KEY: "shouldBeOverwritten",
    }
    result = annotations(user, "test")
    pod = pod_annotations(None, "test")

    assert result["prometheus.io/scrape"] == "false"
    assert result["prometheus.io/port"] == "1234"
    assert result["prometheus.io/path"] == "/test"
    assert result[SHA_KEY] == TEST_SHA
    assert pod[SHA_KEY] == TEST_SHA
    assert user[SHA_KEY] == "shouldBeOverwritten"


def test_annotations_propagate_down():
    result = annotations({"myapp": "mycomponent"}, "")
    pod = pod_annotations({"pod_annotation": "pod_annotation_value"}, "")

    assert len(result) == 5
    assert result["myapp"] == "mycomponent"
    assert pod["pod_annotation"] == "pod_annotation_value"


def test_pod_annotations_only_hash_by_default():
    assert pod_annotations({}, "") == {SHA_KEY: EMPTY_SHA}


def test_config_sha256():
    assert config_sha256("test") == TEST_SHA
    assert config_sha256("") == EMPTY_SHA