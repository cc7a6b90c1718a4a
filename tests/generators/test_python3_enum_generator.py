import pytest

from generators.python3_generator import generate_python3_code
from tests.test_utils import emit, load_fixture_model, model_from_text
from topology_errors import UnresolvedAliasError


def load_generated(code):
    namespace = {}
    exec(compile(code, "<generated>", "exec"), namespace)
    return namespace


def test_generated_module_imports_and_values():
    emission, aliases = emit(load_fixture_model("pinmux.topo"), alias_pattern="{domain}_t")
    code = generate_python3_code(emission, aliases)
    assert code.startswith("# Generated by TopoWrangler from pinmux.topo. DO NOT EDIT.\n")
    generated = load_generated(code)
    pad = generated["PadDirectType"]
    assert [(m.name, m.value) for m in pad] == [
        ("PAD_DIRECT_USB_DP", 0),
        ("PAD_DIRECT_USB_DN", 1),
        ("PAD_DIRECT_SPI_HOST_D0", 3),
    ]
    assert generated["PAD_DIRECT_COUNT"] == 3
    assert generated["PINMUX_OUTSEL_COUNT"] == 5


def test_aliases_refer_to_generated_types():
    emission, aliases = emit(load_fixture_model("pinmux.topo"), alias_pattern="{domain}_t")
    generated = load_generated(generate_python3_code(emission, aliases))
    assert generated["pinmux_pad_t"] is generated["PadDirectType"]
    assert generated["pad_muxed_t"] is generated["PadMuxedType"]


def test_unrecognized_value_without_sentinel_raises():
    emission, aliases = emit(load_fixture_model("pinmux.topo"), alias_pattern="{domain}_t")
    generated = load_generated(generate_python3_code(emission, aliases))
    with pytest.raises(ValueError):
        generated["PadDirectType"](2)


def test_unknown_sentinel_catches_unrecognized_values():
    emission, aliases = emit(load_fixture_model("pinmux.topo"), include_unknown_sentinel=True,
                             alias_pattern="{domain}_t")
    generated = load_generated(generate_python3_code(emission, aliases))
    pad = generated["PadDirectType"]
    assert pad.PAD_DIRECT_UNKNOWN == 4
    assert pad(2) is pad.PAD_DIRECT_UNKNOWN
    assert pad(3) is pad.PAD_DIRECT_SPI_HOST_D0
    # the sentinel is not counted
    assert generated["PAD_DIRECT_COUNT"] == 3
    assert generated["PadMuxedType"](7) == 0xFFFF


def test_reserved_word_external_name_rejected():
    emission, aliases = emit(model_from_text("domain pad { a }"), explicit_aliases={"pad": "lambda"})
    with pytest.raises(UnresolvedAliasError, match="reserved word in Python"):
        generate_python3_code(emission, aliases)
