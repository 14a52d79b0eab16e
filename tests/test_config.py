from qsomap.config import RadioDials, RadioSettings, load_settings_from_text_file, parse_settings_text


def test_defaults():
    d = RadioDials()
    assert d.frequency_mhz == 146.52
    assert d.transmit_power_w == 5.0
    assert d.antenna_height_m == 2.0
    assert RadioSettings().terrain == "linear"


def test_parse_settings_text_with_units():
    text = """
    Frequency: 446.0 MHz
    Power: 500 mW
    Antenna height: 15 ft
    Terrain: flat
    """
    s = parse_settings_text(text)
    assert s.dials.frequency_mhz == 446.0
    assert abs(s.dials.transmit_power_w - 0.5) < 1e-12
    assert abs(s.dials.antenna_height_m - 15 * 0.3048) < 1e-12
    assert s.terrain == "flat"


def test_parse_settings_text_ghz_and_bare_numbers():
    s = parse_settings_text("freq = 1.2 GHz\npower = 10\nantenna = 6")
    assert abs(s.dials.frequency_mhz - 1200.0) < 1e-9
    assert s.dials.transmit_power_w == 10.0
    assert s.dials.antenna_height_m == 6.0


def test_parse_settings_text_missing_fields_fall_back():
    defaults = RadioSettings(dials=RadioDials(frequency_mhz=50.125, transmit_power_w=100.0, antenna_height_m=10.0))
    s = parse_settings_text("just a note, nothing useful\nPower: 0 W", defaults)
    assert s == defaults


def test_load_settings_from_text_file(tmp_path):
    p = tmp_path / "radio.txt"
    p.write_text("Frequency: 144.2 MHz\nPower: 50 W\n", encoding="utf-8")
    s = load_settings_from_text_file(str(p))
    assert s.dials.frequency_mhz == 144.2
    assert s.dials.transmit_power_w == 50.0
    assert s.dials.antenna_height_m == 2.0
