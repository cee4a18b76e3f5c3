from monosyllabize.utils.observability import create_counter, create_histogram, get_logger
from monosyllabize.utils.syllables import estimate_syllable_count, split_orthographic_syllables


def test_estimate_syllable_count_module_location():
    assert estimate_syllable_count("lyrical") >= 1
    assert estimate_syllable_count("cake") == 1
    assert estimate_syllable_count.__module__ == "monosyllabize.utils.syllables"


def test_split_orthographic_syllables_joins_back():
    assert split_orthographic_syllables("business", 2) == ["busi", "ness"]
    assert split_orthographic_syllables("fancy", 2) == ["fan", "cy"]
    assert split_orthographic_syllables("cat", 1) == ["cat"]
    assert "".join(split_orthographic_syllables("strengths", 3)) == "strengths"


def test_structured_logger_renders_context(caplog):
    logger = get_logger("monosyllabize.tests").bind(component="helpers")

    with caplog.at_level("INFO", logger="monosyllabize.tests"):
        logger.info("Hello", context={"word": "cat"})

    assert caplog.records[-1].message == 'Hello | {"component": "helpers", "word": "cat"}'


def test_create_counter_reuses_registered_collector():
    first = create_counter("monosyllabize_test_events_total", "Test events.", label_names=("kind",))
    second = create_counter("monosyllabize_test_events_total", "Test events.", label_names=("kind",))

    first.labels(kind="a").inc()
    second.labels(kind="a").inc()

    assert first._impl is second._impl


def test_create_histogram_reuses_collector():
    first = create_histogram("monosyllabize_test_seconds", "Test durations.", label_names=("stage",))
    second = create_histogram("monosyllabize_test_seconds", "Test durations.", label_names=("stage",))

    with second.labels(stage="graph").time():
        pass

    assert first._impl is second._impl
