import json

from minipl.ast import Loop, VariableDeclaration
from minipl.ast_json import ast_to_obj, ast_from_obj
from minipl.parser import parse_program


SOURCE = '''var n : int := 3;
var s : string := "tab\\there";
var i : int;
var ok : bool := !(n = 0);
for i in 1..n do
    print i * 2;
    read s;
end for;
assert (ok & ("a" < s));
'''


def test_round_trip_through_json():
    program = parse_program(SOURCE)
    text = json.dumps(ast_to_obj(program))
    restored = ast_from_obj(json.loads(text))
    assert restored == program


def test_object_shape():
    obj = ast_to_obj(parse_program('var x : bool;'))
    assert obj == {
        "type": "Program",
        "statements": [{
            "type": "VariableDeclaration",
            "name": "x",
            "type_spec": {"__type__": "TypeSpec", "value": {"kind": "bool"}},
            "row": 1,
        }],
    }


def test_rows_survive():
    restored = ast_from_obj(ast_to_obj(parse_program(SOURCE)))
    loop = restored.statements[4]
    assert isinstance(loop, Loop)
    assert loop.row == 5
    assert loop.body[1].row == 7
    assert isinstance(restored.statements[0].target, VariableDeclaration)
