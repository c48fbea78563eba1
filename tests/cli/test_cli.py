"""
Tests for the compgen command.
"""
import json

import pytest

from compgen.cli import main


@pytest.fixture(autouse=True)
def plain_console(monkeypatch):
    monkeypatch.delenv('FORCE_TERMINAL', raising=False)
    monkeypatch.delenv('TTY_COMPATIBLE', raising=False)
    monkeypatch.delenv('FORCE_COLOR', raising=False)


def test_parse_raw_json(fixtures_dir, capsys):
    main(['parse', str(fixtures_dir / 'multi_component.md'), '--raw-json'])
    data = json.loads(capsys.readouterr().out)
    assert [c['id'] for c in data['components']] == ['profile-card', 'search-input']
    assert data['analysis']['estimatedComplexity'] == 'medium'


def test_parse_table(fixtures_dir, capsys):
    main(['parse', str(fixtures_dir / 'single_component.md')])
    out = capsys.readouterr().out
    assert 'primary-button' in out


def test_parse_missing_file(tmp_path):
    with pytest.raises(SystemExit) as excinfo:
        main(['parse', str(tmp_path / 'nope.md')])
    assert excinfo.value.code == 1


def test_preview(tmp_path, capsys):
    source = tmp_path / 'Foo.tsx'
    source.write_text('const Foo = () => <div>Hi</div>', encoding='utf-8')
    main(['preview', str(source)])
    assert capsys.readouterr().out.strip() == 'function Foo() {\n  return <div>Hi</div>;\n}\n\nrender(<Foo />)'


def test_preview_definition_only(tmp_path, capsys):
    source = tmp_path / 'Foo.tsx'
    source.write_text('const Foo = () => <div>Hi</div>', encoding='utf-8')
    main(['preview', str(source), '--definition-only'])
    assert 'render(' not in capsys.readouterr().out


def test_replay_ndjson(fixtures_dir, capsys):
    main(['replay', str(fixtures_dir / 'single_component.md'), '--chunk-size', '50', '--ndjson'])
    events = [json.loads(line) for line in capsys.readouterr().out.splitlines() if line.strip()]
    assert events[0]['type'] == 'start'
    assert events[-1]['type'] == 'done'
    assert events[-1]['data']['components'][0]['id'] == 'primary-button'


def test_replay_failure(tmp_path, capsys):
    response = tmp_path / 'prose.md'
    response.write_text('No components, sorry.', encoding='utf-8')
    with pytest.raises(SystemExit) as excinfo:
        main(['replay', str(response), '--ndjson'])
    assert excinfo.value.code == 1
    last = json.loads(capsys.readouterr().out.splitlines()[-1])
    assert last['type'] == 'error'


def test_replay_rejects_bad_chunk_size(fixtures_dir):
    with pytest.raises(SystemExit) as excinfo:
        main(['replay', str(fixtures_dir / 'single_component.md'), '--chunk-size', '0'])
    assert excinfo.value.code == 2
