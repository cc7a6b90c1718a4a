import pytest

from generators.rust_generator import generate_rust_code, rust_repr
from tests.test_utils import emit, load_fixture_model, model_from_text
from topology_errors import UnresolvedAliasError


def test_repr_follows_bit_width():
    emission, _ = emit(load_fixture_model("pinmux.topo"), alias_pattern="{domain}_t")
    assert rust_repr(emission.find_block("PadDirectType")) == "u8"
    assert rust_repr(emission.find_block("PadMuxedType")) == "u16"
    wide, _ = emit(model_from_text("domain wide bits 33 alias wide_t { a }"))
    assert rust_repr(wide.blocks[0]) == "u64"


def test_enum_with_try_from_decoder():
    emission, aliases = emit(load_fixture_model("pinmux.topo"), alias_pattern="{domain}_t")
    code = generate_rust_code(emission, aliases)
    assert code.startswith("// Generated by TopoWrangler from pinmux.topo. DO NOT EDIT.\n")
    assert "#[repr(u8)]\npub enum PadDirectType {" in code
    assert "    UsbDp = 0,\n    UsbDn = 1,\n    SpiHostD0 = 3,\n}" in code
    assert "pub const PAD_DIRECT_COUNT: usize = 3;" in code
    assert "impl TryFrom<u8> for PadDirectType {" in code
    assert "            3 => Ok(Self::SpiHostD0)," in code
    assert "            _ => Err(value)," in code
    assert "impl From<" not in code


def test_unknown_sentinel_uses_infallible_decoder():
    emission, aliases = emit(load_fixture_model("pinmux.topo"), include_unknown_sentinel=True,
                             alias_pattern="{domain}_t")
    code = generate_rust_code(emission, aliases)
    assert "    Unknown = 65535," in code
    assert "impl From<u16> for PadMuxedType {" in code
    assert "            _ => Self::Unknown," in code
    assert "TryFrom" not in code


def test_aliases_are_type_aliases():
    emission, aliases = emit(load_fixture_model("pinmux.topo"), alias_pattern="{domain}_t")
    code = generate_rust_code(emission, aliases)
    assert "#[allow(non_camel_case_types)]\npub type pinmux_pad_t = PadDirectType;" in code
    assert code.endswith("pub type pad_muxed_t = PadMuxedType;\n")


def test_reserved_word_external_name_rejected():
    emission, aliases = emit(model_from_text("domain pad { a }"), explicit_aliases={"pad": "impl"})
    with pytest.raises(UnresolvedAliasError, match="reserved word in Rust"):
        generate_rust_code(emission, aliases)
