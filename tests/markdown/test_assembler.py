"""
Tests for assembling records from whole and partial responses.
"""
import pytest

from compgen import ComponentParser, parse_markdown_response
from compgen.core.error_handling import MarkdownParseError
from compgen.markdown import sections


@pytest.fixture
def single(load_fixture):
    return load_fixture('single_component.md')


@pytest.fixture
def multi(load_fixture):
    return load_fixture('multi_component.md')


def test_single_component_fields(single):
    result = parse_markdown_response(single)
    assert result.component_ids == ['primary-button']
    component = result.components[0]
    assert component.name == 'Primary Button'
    assert component.category == 'Buttons'
    assert component.description == 'A clickable button with primary styling'
    assert component.documentation == (
        'A reusable button.\n'
        '\n'
        '### Props\n'
        '- `label`: text shown on the button\n'
        '- `onClick`: click handler'
    )
    assert component.code.startswith("import React from 'react';")
    assert component.code.endswith('export default PrimaryButton;')


def test_single_component_preview_code(single):
    component = parse_markdown_response(single).components[0]
    assert component.preview_code == (
        'function PrimaryButton({ label, onClick }) {\n'
        "  const classes = 'px-4 py-2 rounded bg-blue-600 text-white';\n"
        '\n'
        '  return <button className={classes} onClick={onClick}>\n'
        '      {label}\n'
        '    </button>;\n'
        '}\n'
        '\n'
        'render(<PrimaryButton />)'
    )


def test_single_component_preview_codes(single):
    component = parse_markdown_response(single).components[0]
    assert len(component.preview_codes) == 2
    assert component.preview_codes[0].endswith(
        '}\n\n// Default\nrender(<PrimaryButton label="Click me!" />)')
    assert 'Extra' not in component.preview_codes[1]
    assert component.preview_codes[1].endswith(
        "render(\n  <PrimaryButton\n    label=\"Save\"\n    onClick={() => alert('saved')}\n  />\n)")


def test_single_component_analysis(single):
    analysis = parse_markdown_response(single).analysis
    assert analysis.summary == 'The user needs a primary action button'
    assert analysis.technical_requirements == ['React 18', 'Tailwind CSS']
    assert analysis.design_patterns == ['Controlled props']
    assert analysis.estimated_complexity == 'low'
    assert analysis.recommendations == ['Add a loading state']
    assert analysis.dependencies == ['react']
    assert analysis.component_categories[0].category == 'Buttons'
    assert analysis.component_categories[0].components == []


def test_multiple_components(multi):
    result = parse_markdown_response(multi)
    assert result.component_ids == ['profile-card', 'search-input']
    card = result.get_component('profile-card')
    assert card.documentation == 'Displays a user profile.\n\nPass `name`, `bio` and `avatarUrl`.'
    assert card.preview_code.startswith('function ProfileCard({ name, bio, avatarUrl }) {\n  const initials = ')
    assert card.preview_codes is None
    search = result.get_component('search-input')
    assert search.preview_code.startswith('function SearchInput({ value, onChange, placeholder }) {\n'
                                          '  return <label className="flex items-center gap-2">')
    assert '🔍' in search.preview_code
    assert search.preview_code.endswith('</label>;\n}\n\nrender(<SearchInput />)')
    assert result.get_component('missing') is None


def test_multi_analysis(multi):
    analysis = parse_markdown_response(multi).analysis
    assert [c.description for c in analysis.component_categories] == ['Content containers', 'Inputs: text and search']
    assert analysis.technical_requirements == ['React 18', 'Tailwind CSS']
    assert analysis.dependencies == ['react', 'tailwindcss']


def test_to_dict_uses_camel_case_and_omits_absent_fields(multi):
    data = parse_markdown_response(multi).to_dict()
    card = data['components'][0]
    assert 'previewCode' in card
    assert 'previewCodes' not in card
    assert 'preview_code' not in card
    assert data['analysis']['componentCategories'][0] == {
        'category': 'Cards', 'description': 'Content containers', 'components': []}
    assert 'technicalRequirements' in data['analysis']


def test_component_without_id_is_skipped():
    text = '# Component: Anonymous\n## Name: Anonymous\n## Code:\n```tsx\nconst A = () => <a />;\n```'
    assert parse_markdown_response(text).components == []


def test_component_without_code_has_no_preview():
    result = parse_markdown_response('# Component: A\n## ID: a\n## Name: A\n## Code:\n```tsx\n```')
    component = result.components[0]
    assert component.code is None
    assert component.preview_code is None
    assert component.preview_codes is None


def test_analysis_blocks_merge():
    text = (
        '# Analysis: first\n## Summary: one\n## Dependencies:\n- a\n'
        '---\n'
        '# Analysis: second\n## Summary: two\n'
    )
    analysis = parse_markdown_response(text).analysis
    assert analysis.summary == 'two'
    assert analysis.dependencies == ['a']


def test_empty_and_prose_buffers():
    for text in ('', 'Thinking about your request...'):
        result = parse_markdown_response(text)
        assert result.components == []
        assert not result.has_analysis
        assert result.to_dict() == {'components': [], 'analysis': {}}


def test_prefix_does_not_change_completed_components(multi):
    cut = multi.index('# Component: Search Input')
    partial = parse_markdown_response(multi[:cut])
    full = parse_markdown_response(multi)
    assert partial.component_ids == ['profile-card']
    assert partial.components[0] == full.components[0]


def test_every_prefix_parses(single):
    full = parse_markdown_response(single)
    previous = 0
    for end in range(0, len(single) + 1, 7):
        result = parse_markdown_response(single[:end])
        assert len(result.components) >= previous
        previous = len(result.components)
    assert parse_markdown_response(single).to_dict() == full.to_dict()


def test_fence_aware_parser():
    text = (
        '# Component: Rule\n## ID: rule\n## Name: Rule\n## Code:\n'
        '```tsx\nconst Rule = () => <pre>{`\n---\n`}</pre>;\n```'
    )
    assert ComponentParser().parse(text).components[0].code is None
    assert ComponentParser(fence_aware=True).parse(text).components[0].code.startswith('const Rule')


def test_unexpected_failure_becomes_markdown_parse_error(monkeypatch):
    def explode(text, fence_aware=None):
        raise RuntimeError('boom')

    monkeypatch.setattr(sections, 'split_sections', explode)
    with pytest.raises(MarkdownParseError) as excinfo:
        parse_markdown_response('# Component: A')
    assert isinstance(excinfo.value.__cause__, RuntimeError)
    assert excinfo.value.buffer_length == len('# Component: A')


def test_preview_fence_is_not_taken_as_code():
    text = (
        '# Component: Card\n## ID: card\n## Name: Card\n'
        '## Code:\n'
        '```typescript\nconst Card = () => <div />;\n```\n'
        '## Preview Codes:\n'
        '```tsx\nrender(<Card />)\n```'
    )
    component = parse_markdown_response(text).components[0]
    assert component.code is None
    assert component.preview_code is None
    assert component.preview_codes is None
