from compgen import ComponentParser
from compgen.synthesis import build_preview_code, build_previews, render_call
from compgen.synthesis.strategies import SynthesizedDefinition
from compgen.synthesis.preview import combine

ARROW = 'const Foo = () => <div>Hi</div>'


def test_render_call():
    assert render_call('Foo') == 'render(<Foo />)'


def test_preview_code_appends_default_render():
    assert build_preview_code(ARROW) == (
        'function Foo() {\n'
        '  return <div>Hi</div>;\n'
        '}\n'
        '\n'
        'render(<Foo />)'
    )


def test_combine_keeps_existing_render_call():
    definition = SynthesizedDefinition('Foo', 'function Foo() {}', 'structural')
    assert combine(definition, 'render(<Foo big />)') == 'function Foo() {}\n\nrender(<Foo big />)'


def test_combine_adds_render_after_comments():
    definition = SynthesizedDefinition('Foo', 'function Foo() {}', 'structural')
    assert combine(definition, '// only a note') == 'function Foo() {}\n\n// only a note\nrender(<Foo />)'


def test_build_previews_without_blocks():
    preview_code, preview_codes = build_previews(ARROW, [])
    assert preview_code.endswith('render(<Foo />)')
    assert preview_codes is None


def test_build_previews_filters_each_block():
    blocks = [
        'const unused = 1;\nrender(<Foo />)\nrender(<Foo again />)',
        '// Empty state\nconsole.log("x")',
    ]
    _, preview_codes = build_previews(ARROW, blocks)
    assert len(preview_codes) == 2
    assert preview_codes[0].endswith('}\n\nrender(<Foo />)')
    assert 'unused' not in preview_codes[0]
    assert 'again' not in preview_codes[0]
    assert preview_codes[1].endswith('}\n\n// Empty state\nrender(<Foo />)')


def test_fallback_definition_uses_its_own_name_in_render_call():
    preview = ComponentParser.preview('garbage <<<')[0]
    assert preview.endswith('render(<Component />)')


def test_component_parser_preview_per_block():
    previews = ComponentParser.preview(ARROW, ['render(<Foo />)', 'render(<Foo />)'])
    assert len(previews) == 2
