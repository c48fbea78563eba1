"""
Tests for the stream session and the event iterator.
"""
import pytest

from compgen import ComponentParser, StreamSession, StreamState, iter_stream_events, parse_markdown_response
from compgen.core.error_handling import CompgenError, MarkdownParseError, TerminalParseError
from compgen.models import StreamEventType
from compgen import stream as stream_module

COMPONENT = '# Component: Tag\n## ID: tag\n## Name: Tag\n## Code:\n```tsx\nconst Tag = () => <em>tag</em>;\n```\n'


def chunked(text, size):
    return [text[i:i + size] for i in range(0, len(text), size)]


@pytest.fixture
def single(load_fixture):
    return load_fixture('single_component.md')


def test_session_states(single):
    session = StreamSession()
    assert session.state is StreamState.ACCUMULATING
    session.feed(single[:20])
    assert session.state is StreamState.ACCUMULATING
    session.feed(single[20:])
    assert session.state is StreamState.PARTIAL
    done = session.finish()
    assert done.type is StreamEventType.DONE
    assert session.state is StreamState.COMPLETE
    assert session.is_complete


def test_finish_without_analysis_stays_partial():
    session = StreamSession()
    session.feed(COMPONENT)
    done = session.finish()
    assert done.data.component_ids == ['tag']
    assert session.state is StreamState.PARTIAL
    assert not session.is_complete


def test_chunk_events_only_with_components():
    session = StreamSession()
    assert session.feed('# Analysis: a\n## Summary: s\n---\n') is None
    event = session.feed(COMPONENT)
    assert event.type is StreamEventType.CHUNK
    assert event.data.component_ids == ['tag']


def test_empty_chunk_is_ignored():
    session = StreamSession()
    assert session.feed('') is None
    assert session.chunk_count == 0


def test_duplicate_results_are_suppressed():
    session = StreamSession()
    assert session.feed(COMPONENT) is not None
    assert session.feed('\n') is None
    assert session.last_result.component_ids == ['tag']


def test_duplicates_can_be_emitted():
    session = StreamSession(suppress_duplicates=False)
    session.feed(COMPONENT)
    assert session.feed('\n') is not None


def test_done_matches_one_shot_parse(single):
    events = list(iter_stream_events(chunked(single, 40), prompt='a button'))
    assert events[0].type is StreamEventType.START
    assert events[0].prompt == 'a button'
    assert events[-1].type is StreamEventType.DONE
    assert events[-1].data.to_dict() == parse_markdown_response(single).to_dict()
    chunks = [event for event in events if event.type is StreamEventType.CHUNK]
    assert chunks
    digests = [event.data.to_dict() for event in chunks]
    assert all(a != b for a, b in zip(digests, digests[1:]))


def test_component_parser_stream_events(load_fixture):
    text = load_fixture('multi_component.md')
    events = list(ComponentParser().stream_events(chunked(text, 13)))
    assert events[-1].data.component_ids == ['profile-card', 'search-input']


def test_parse_failure_keeps_last_result(monkeypatch):
    session = StreamSession()
    first = session.feed(COMPONENT)

    def broken(text, fence_aware=None):
        raise MarkdownParseError(buffer_length=len(text))

    monkeypatch.setattr(stream_module, 'parse_markdown_response', broken)
    assert session.feed('## more') is None
    assert session.failed_parses == 1
    assert session.last_result is first.data
    done = session.finish()
    assert done.data is first.data


def test_finish_without_components_raises():
    session = StreamSession()
    session.feed('I could not come up with anything.')
    with pytest.raises(TerminalParseError) as excinfo:
        session.finish()
    assert excinfo.value.reason == 'no components found'
    assert excinfo.value.buffer_length == len('I could not come up with anything.')


def test_finish_after_failed_parses_raises(monkeypatch):
    def broken(text, fence_aware=None):
        raise MarkdownParseError()

    monkeypatch.setattr(stream_module, 'parse_markdown_response', broken)
    session = StreamSession()
    session.feed(COMPONENT)
    with pytest.raises(TerminalParseError) as excinfo:
        session.finish()
    assert excinfo.value.reason == 'buffer could not be parsed'


def test_feed_after_finish_raises():
    session = StreamSession()
    session.feed(COMPONENT)
    session.finish()
    with pytest.raises(CompgenError):
        session.feed('late')


def test_error_event_for_failed_stream():
    events = list(iter_stream_events(['Sorry, ', 'no components today.']))
    assert [event.type for event in events] == [StreamEventType.START, StreamEventType.ERROR]
    assert events[-1].error == 'Markdown format parsing failed'
    assert 'no components found' in events[-1].details


def test_event_serialization():
    events = list(iter_stream_events([COMPONENT]))
    data = [event.to_dict() for event in events]
    assert [item['type'] for item in data] == ['start', 'chunk', 'done']
    assert data[0]['message'] == 'Started processing user requirements'
    assert data[0]['timestamp'].endswith('Z')
    assert 'data' not in data[0]
    assert data[1]['data']['components'][0]['previewCode'].endswith('render(<Tag />)')
