from src.core.mobility.details_parser import DetailsTokenizer, parse_leading_int


class TestDetailsTokenizer:

    def setup_method(self):
        self.tokenizer = DetailsTokenizer()

    def test_tokenize_key_value_pairs(self):
        tokens = self.tokenizer.tokenize("Roamed Signal[-67] Band[5GHz] Channel[36] to new AP")
        assert tokens == {'Signal': '-67', 'Band': '5GHz', 'Channel': '36'}

    def test_values_may_contain_spaces(self):
        tokens = self.tokenizer.tokenize("Reason[Client moved out of range] Code[3]")
        assert tokens['Reason'] == 'Client moved out of range'

    def test_repeated_key_keeps_last_value(self):
        assert self.tokenizer.tokenize("Channel[1] Channel[11]") == {'Channel': '11'}

    def test_empty_and_missing(self):
        assert self.tokenizer.tokenize(None) == {}
        assert self.tokenizer.tokenize("") == {}
        assert self.tokenizer.tokenize("no tokens here") == {}

    def test_unterminated_token_is_ignored(self):
        attrs = self.tokenizer.parse("Signal[-65")
        assert attrs.rssi is None
        assert attrs.raw == {}

    def test_empty_brackets_are_ignored(self):
        assert self.tokenizer.tokenize("Band[] Channel[6]") == {'Channel': '6'}

    def test_typed_fields(self):
        attrs = self.tokenizer.parse(
            "Cause[Roam] Reason[Better AP] Code[0] Status[200] Channel[149] "
            "Band[5GHz] AuthMethod[WPA2-Enterprise] RSSI[-58]"
        )
        assert attrs.rssi == -58
        assert attrs.cause == 'Roam'
        assert attrs.reason == 'Better AP'
        assert attrs.code == '0'
        assert attrs.status_code == '200'
        assert attrs.channel == '149'
        assert attrs.band == '5GHz'
        assert attrs.auth_method == 'WPA2-Enterprise'

    def test_rssi_key_precedence(self):
        assert self.tokenizer.parse("RSSI[-80] RSS[-70] Signal[-60]").rssi == -60
        assert self.tokenizer.parse("RSSI[-80] RSS[-70]").rssi == -70

    def test_auth_precedence(self):
        assert self.tokenizer.parse("AuthMethod[PSK] Auth[SAE]").auth_method == 'SAE'

    def test_unparseable_rssi_is_absent(self):
        assert self.tokenizer.parse("Signal[strong]").rssi is None

    def test_rssi_with_unit_suffix(self):
        assert self.tokenizer.parse("Signal[-72 dBm]").rssi == -72


def test_parse_leading_int():
    assert parse_leading_int("-67dBm") == -67
    assert parse_leading_int(" 12") == 12
    assert parse_leading_int("abc") is None
    assert parse_leading_int(None) is None
