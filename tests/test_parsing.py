import pytest

from shipwright.core.errors import MalformedIndentationError
from shipwright.parsing.lexer import GameLexer
from shipwright.parsing.tree import TreeBuilder, convenience_value, parse

SAMPLE_SHIP = (
    'ship "Heavy Shuttle"\n'
    '\tplural "Heavy Shuttles"\n'
    '\tattributes\n'
    '\t\tcategory "Transport"\n'
    '\t\t"cost" 240000\n'
    '\tgun -12 -30 "Energy Blaster"\n'
    '\tgun 12 -30\n'
    '\tdescription `The Heavy Shuttle is a "bulk" hauler.`\n'
)


def test_spec_example_single_root():
    """
    TREE TEST: A ship header with one nested scalar line.
    """
    nodes = parse("ship Test Ship\n\tmass 100")

    assert len(nodes) == 1
    ship = nodes[0]
    assert ship.key == "ship"
    assert ship.value == "Test Ship"
    assert len(ship.children) == 1
    assert ship.children[0].key == "mass"
    assert ship.children[0].value == "100"


def test_nested_structure_and_order():
    nodes = parse(SAMPLE_SHIP)

    ship = nodes[0]
    assert ship.value == "Heavy Shuttle"
    assert [c.key for c in ship.children] == ["plural", "attributes", "gun", "gun", "description"]

    attributes = ship.find("attributes")[0]
    assert [(c.key, c.value) for c in attributes.children] == [("category", "Transport"), ("cost", "240000")]

    guns = ship.find("gun")
    assert guns[0].values == ["-12", "-30", "Energy Blaster"]
    assert guns[0].value is None
    assert guns[1].values == ["12", "-30"]


def test_quoted_spans_stay_whole():
    """
    LEXER TEST: Backtick quotes may contain double quotes and spaces.
    """
    description = parse(SAMPLE_SHIP)[0].find("description")[0]
    assert description.value == 'The Heavy Shuttle is a "bulk" hauler.'
    assert description.quoted == (True,)


@pytest.mark.parametrize("text", [
    "# leading comment\nship A\n\n\t# nested comment\n\tmass 5\n",
    "\ufeffship A\r\n\tmass 5\r\n",
    "ship A\n\tmass 5 # trailing comment\n",
])
def test_comments_blank_lines_and_artifacts_are_ignored(text):
    nodes = parse(text)
    assert [n.key for n in nodes] == ["ship"]
    assert [(c.key, c.values) for c in nodes[0].children] == [("mass", ["5"])]


def test_comment_marker_inside_quotes_is_text():
    node = parse('outfit "Item #7"\n')[0]
    assert node.value == "Item #7"


def test_unterminated_quote_runs_to_end_of_line():
    tokens, quoted = GameLexer().tokenize('sprite "ship/heavy shuttle')
    assert tokens == ["sprite", "ship/heavy shuttle"]
    assert quoted == (False, True)


def test_custom_comment_marker():
    nodes = parse("; comment\nship A\n\tmass 5 ; note\n", comment_marker=";")
    assert nodes[0].children[0].values == ["5"]


def test_indentation_jump_is_fatal():
    """
    SAFETY TEST: Skipping an indentation level must abort the parse and
    name the offending line.
    """
    with pytest.raises(MalformedIndentationError) as excinfo:
        parse("ship A\n\t\t\tmass 5\n")
    assert excinfo.value.line == 2
    assert excinfo.value.code == "E4009"


def test_dedent_to_any_open_ancestor():
    text = "ship A\n\tattributes\n\t\tmass 5\n\tsprite ship/a\nship B\n"
    nodes = parse(text)

    assert [n.value for n in nodes] == ["A", "B"]
    assert [c.key for c in nodes[0].children] == ["attributes", "sprite"]


def test_tab_width_and_indent_step():
    builder = TreeBuilder(GameLexer(tab_width=4), indent_step=4)
    nodes = builder.parse("ship A\n\tattributes\n\t\tmass 5\n")
    assert nodes[0].children[0].children[0].key == "mass"


def test_deep_nesting_does_not_recurse():
    depth = 3000
    text = "\n".join("\t" * i + f"level {i}" for i in range(depth))
    node = parse(text)[0]
    for _ in range(depth - 1):
        node = node.children[0]
    assert node.value == str(depth - 1)


@pytest.mark.parametrize("tokens,quoted,expected", [
    (["Test"], (False,), "Test"),
    (["Test", "Ship"], (False, False), "Test Ship"),
    (["Base", "Variant"], (True, True), None),
    (["-12", "30"], (False, False), None),
    ([], (), None),
])
def test_convenience_value(tokens, quoted, expected):
    assert convenience_value(tokens, quoted) == expected
