import pytest

from model import Domain, Member, TopologyModel
from symbol_namer import CanonicalName, Casing, SymbolNamer, format_identifier, split_words
from topology_errors import NameCollisionError


def make_domain(name, member_names, category=""):
    return Domain(name, [Member(n, i) for i, n in enumerate(member_names)], category=category)


@pytest.mark.parametrize("name, words", [
    ("usb_dp", ["usb", "dp"]),
    ("UsbDp", ["Usb", "Dp"]),
    ("usb__dp", ["usb", "dp"]),
    ("GPIO0", ["GPIO0"]),
    ("gpio_gpio0", ["gpio", "gpio0"]),
    ("HTTPServer", ["HTTP", "Server"]),
    ("i2c0_sda", ["i2c0", "sda"]),
    ("spi-host.d0", ["spi", "host", "d0"]),
])
def test_split_words(name, words):
    assert split_words([name]) == words


@pytest.mark.parametrize("casing, expected", [
    (Casing.SNAKE, "pad_direct_usb_dp"),
    (Casing.UPPER_SNAKE, "PAD_DIRECT_USB_DP"),
    (Casing.UPPER_CAMEL, "PadDirectUsbDp"),
    (Casing.LOWER_CAMEL, "padDirectUsbDp"),
])
def test_format_identifier_casings(casing, expected):
    assert format_identifier(["pad_direct", "usb_dp"], casing) == expected


def test_format_identifier_skips_empty_parts():
    assert format_identifier(["", None, "pad__direct_"], Casing.UPPER_SNAKE) == "PAD_DIRECT"


def test_canonical_names_for_example_domain():
    domain = make_domain("pad_direct", ["usb_dp", "usb_dn"])
    namer = SymbolNamer()
    assert namer.name(domain) == CanonicalName("pad_direct", "PadDirectType", "PAD_DIRECT")
    assert namer.name(domain, domain.members[0]) == CanonicalName("usb_dp", "PadDirectType", "PAD_DIRECT_USB_DP")
    assert namer.count_name(domain) == "PAD_DIRECT_COUNT"
    assert namer.unknown_name(domain) == "PAD_DIRECT_UNKNOWN"
    assert namer.variant_name(domain.members[1]) == "UsbDn"


def test_category_and_prefix_are_prepended():
    domain = make_domain("insel", ["constant_zero"], category="pinmux")
    namer = SymbolNamer(prefix="top_earlgrey", type_suffix="")
    canonical = namer.name(domain, domain.members[0])
    assert canonical.value_name == "TOP_EARLGREY_PINMUX_INSEL_CONSTANT_ZERO"
    assert canonical.type_name == "TopEarlgreyPinmuxInsel"
    assert namer.name(domain).short_name == "pinmux_insel"


def test_namer_is_deterministic():
    domain = make_domain("pad_direct", ["usb_dp", "usb_dn"])
    first = [SymbolNamer().name(domain, m) for m in domain.members]
    second = [SymbolNamer().name(domain, m) for m in domain.members]
    assert first == second


def test_value_names_are_injective_within_domain():
    domain = make_domain("outsel", ["constant_zero", "constant_one", "constant_high_z", "gpio_gpio0"])
    names = SymbolNamer().check_domain(domain)
    value_names = [names[m.name].value_name for m in domain.members]
    assert len(set(value_names)) == len(value_names)


def test_collision_after_normalization_reports_both_names():
    domain = make_domain("pad_direct", ["usb_dp", "usbDp"])
    with pytest.raises(NameCollisionError) as excinfo:
        SymbolNamer().check_domain(domain)
    assert excinfo.value.first == "usb_dp"
    assert excinfo.value.second == "usbDp"
    assert excinfo.value.identifier == "PAD_DIRECT_USB_DP"
    assert "usb_dp" in str(excinfo.value) and "usbDp" in str(excinfo.value)


def test_collision_on_variant_name_only():
    # a_1_2 and a_12 differ as UPPER_SNAKE but both become A12 as a variant
    domain = make_domain("d", ["a_1_2", "a_12"])
    with pytest.raises(NameCollisionError) as excinfo:
        SymbolNamer().check_domain(domain)
    assert excinfo.value.identifier == "A12"


@pytest.mark.parametrize("member", ["count", "Unknown"])
def test_member_may_not_shadow_synthetic_constants(member):
    domain = make_domain("d", ["x", member])
    with pytest.raises(NameCollisionError):
        SymbolNamer().check_domain(domain)


def test_cross_domain_value_collision_detected():
    # PAD + direct_usb and PAD_DIRECT + usb both spell PAD_DIRECT_USB
    topology = TopologyModel("t.topo", [
        make_domain("pad", ["direct_usb"]),
        make_domain("pad_direct", ["usb"]),
    ])
    with pytest.raises(NameCollisionError) as excinfo:
        SymbolNamer().check_topology(topology)
    assert excinfo.value.identifier == "PAD_DIRECT_USB"
    assert excinfo.value.first == "pad.direct_usb"
    assert excinfo.value.second == "pad_direct.usb"


def test_cross_domain_type_collision_detected():
    topology = TopologyModel("t.topo", [make_domain("pad_direct", ["x"]), make_domain("pad__direct", ["y"])])
    with pytest.raises(NameCollisionError) as excinfo:
        SymbolNamer().check_topology(topology)
    assert excinfo.value.identifier == "PadDirectType"
