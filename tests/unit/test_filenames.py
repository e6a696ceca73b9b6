from docingest.ingestion.filenames import DEFAULT_FILENAME, normalize_original_name


class TestNormalizeOriginalName:
    def test_missing_name_uses_default(self) -> None:
        assert normalize_original_name(None) == DEFAULT_FILENAME
        assert normalize_original_name("") == DEFAULT_FILENAME

    def test_plain_ascii_is_unchanged(self) -> None:
        assert normalize_original_name("resume.pdf") == "resume.pdf"

    def test_url_encoded_name_is_decoded(self) -> None:
        assert normalize_original_name("%EC%9D%B4%EB%A0%A5%EC%84%9C.pdf") == "이력서.pdf"

    def test_latin1_mojibake_is_repaired(self) -> None:
        garbled = "이력서.pdf".encode("utf-8").decode("latin-1")
        assert normalize_original_name(garbled) == "이력서.pdf"

    def test_proper_unicode_name_is_unchanged(self) -> None:
        assert normalize_original_name("résumé.pdf") == "résumé.pdf"
        assert normalize_original_name("이력서.pdf") == "이력서.pdf"

    def test_literal_percent_sign_is_kept(self) -> None:
        assert normalize_original_name("100%.pdf") == "100%.pdf"
