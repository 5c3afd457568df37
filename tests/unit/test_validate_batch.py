from intake.classifier.classifier import FilenameClassifier, validate_batch
from intake.classifier.models import RejectionReason, UploadCandidate
from intake.taxonomy.models import Category


def _candidate(filename: str, mime_type: str = "") -> UploadCandidate:
    if not mime_type:
        mime_type = "application/pdf" if filename.lower().endswith(".pdf") else "image/jpeg"
    return UploadCandidate(filename=filename, mime_type=mime_type, content=b"x")


def _names(items: list) -> list[str]:  # type: ignore[type-arg]
    return [item.candidate.filename for item in items]


class TestAccepts:
    def test_accepts_valid_files_with_parsed_fields(self) -> None:
        result = validate_batch(
            [_candidate("vi_switchgear_site1.jpg"), _candidate("ts_cbm_test.pdf")], []
        )

        assert _names(result.accepted) == ["vi_switchgear_site1.jpg", "ts_cbm_test.pdf"]
        assert result.accepted[0].parsed.category is Category.VISUAL_DEFECT
        assert result.accepted[1].parsed.category is Category.TEST_SHEET
        assert result.rejected == []
        assert not result.has_rejections

    def test_empty_batch(self) -> None:
        result = validate_batch([], ["gen_logo.png"])
        assert result.accepted == []
        assert result.rejected == []

    def test_accepts_generator_input(self) -> None:
        result = validate_batch((c for c in [_candidate("gen_logo.png")]), iter([]))
        assert _names(result.accepted) == ["gen_logo.png"]


class TestRejectionReasons:
    def test_malformed_name(self) -> None:
        result = validate_batch([_candidate("randomfile.jpg")], [])
        assert result.rejected[0].reason is RejectionReason.MALFORMED_NAME

    def test_missing_extension_is_malformed(self) -> None:
        result = validate_batch([_candidate("vi_switchgear", "image/jpeg")], [])
        assert result.rejected[0].reason is RejectionReason.MALFORMED_NAME

    def test_unsupported_media_type(self) -> None:
        result = validate_batch([_candidate("vi_switchgear.jpg", "text/plain")], [])
        rejection = result.rejected[0]
        assert rejection.reason is RejectionReason.UNSUPPORTED_MEDIA_TYPE
        assert "text/plain" in rejection.message

    def test_media_type_parameters_are_ignored(self) -> None:
        result = validate_batch([_candidate("ts_cbm.pdf", "Application/PDF; charset=binary")], [])
        assert _names(result.accepted) == ["ts_cbm.pdf"]

    def test_empty_media_type_is_not_checked(self) -> None:
        candidate = UploadCandidate(filename="gen_logo.png")
        result = validate_batch([candidate], [])
        assert _names(result.accepted) == ["gen_logo.png"]

    def test_unknown_category(self) -> None:
        result = validate_batch([_candidate("vi_unicorn.jpg")], [])
        assert result.rejected[0].reason is RejectionReason.UNKNOWN_CATEGORY

    def test_file_kind_mismatch_messages_differ(self) -> None:
        result = validate_batch(
            [_candidate("ts_cbm_test.jpg"), _candidate("vi_switchgear_site1.pdf")], []
        )

        reasons = [r.reason for r in result.rejected]
        assert reasons == [RejectionReason.FILE_KIND_MISMATCH] * 2
        assert "Test Sheet files must be PDF documents" in result.rejected[0].message
        assert "Visual Defect files must be images" in result.rejected[1].message

    def test_describe_pairs_filename_with_message(self) -> None:
        result = validate_batch([_candidate("ts_cbm_test.jpg")], [])
        assert result.rejected[0].describe().startswith("ts_cbm_test.jpg - Test Sheet files")


class TestDuplicates:
    def test_existing_filename_ignoring_case(self) -> None:
        result = validate_batch([_candidate("VI_Switchgear_A.jpg")], ["vi_switchgear_a.JPG"])

        assert result.accepted == []
        assert result.rejected[0].reason is RejectionReason.DUPLICATE_FILENAME
        assert "already exists" in result.rejected[0].message

    def test_same_name_twice_in_batch(self) -> None:
        result = validate_batch(
            [_candidate("VI_Switchgear_A.jpg"), _candidate("vi_switchgear_a.jpg")], []
        )

        assert _names(result.accepted) == ["VI_Switchgear_A.jpg"]
        assert _names(result.rejected) == ["vi_switchgear_a.jpg"]
        assert result.rejected[0].reason is RejectionReason.DUPLICATE_FILENAME
        assert "earlier file in this batch" in result.rejected[0].message

    def test_rejected_earlier_candidate_still_claims_the_name(self) -> None:
        result = validate_batch(
            [
                _candidate("vi_switchgear_a.jpg", "text/plain"),
                _candidate("VI_Switchgear_A.jpg", "image/jpeg"),
            ],
            [],
        )

        assert result.accepted == []
        reasons = [r.reason for r in result.rejected]
        assert reasons == [
            RejectionReason.UNSUPPORTED_MEDIA_TYPE,
            RejectionReason.DUPLICATE_FILENAME,
        ]

    def test_other_names_after_a_duplicate_are_accepted(self) -> None:
        result = validate_batch(
            [
                _candidate("gen_logo.png"),
                _candidate("GEN_LOGO.png"),
                _candidate("stk_normal_bay1.jpg"),
            ],
            [],
        )

        assert _names(result.accepted) == ["gen_logo.png", "stk_normal_bay1.jpg"]
        assert _names(result.rejected) == ["GEN_LOGO.png"]


class TestOrderStability:
    def test_one_rejection_keeps_order_of_the_others(self) -> None:
        names = [
            "sc_transformer_bay1.jpg",
            "mi_oltt_bay1.png",
            "ts_cbm_bay1.jpg",
            "stk_normal_bay1.tif",
            "ts_vitest_bay1.pdf",
        ]
        full = validate_batch([_candidate(n) for n in names if n != "ts_cbm_bay1.jpg"], [])
        mixed = validate_batch([_candidate(n) for n in names], [])

        assert _names(mixed.rejected) == ["ts_cbm_bay1.jpg"]
        assert _names(mixed.accepted) == _names(full.accepted)
        assert [a.parsed for a in mixed.accepted] == [a.parsed for a in full.accepted]

    def test_rejections_follow_input_order(self) -> None:
        result = validate_batch(
            [
                _candidate("zzz.jpg"),
                _candidate("gen_logo.png"),
                _candidate("ts_cbm.png"),
                _candidate("aaa.jpg"),
            ],
            [],
        )
        assert _names(result.rejected) == ["zzz.jpg", "ts_cbm.png", "aaa.jpg"]

    def test_is_deterministic(self) -> None:
        batch = [_candidate("gen_logo.png"), _candidate("gen_logo.png"), _candidate("x.jpg")]
        assert validate_batch(batch, []) == validate_batch(batch, [])


class TestAllowUncategorized:
    def test_accepts_unknown_pair_as_uncategorized(self) -> None:
        classifier = FilenameClassifier(allow_uncategorized=True)
        result = classifier.validate_batch([_candidate("site_walkaround_01.jpg")], [])

        assert result.accepted[0].parsed.category is Category.UNCATEGORIZED

    def test_accepts_uncategorized_pdf(self) -> None:
        classifier = FilenameClassifier(allow_uncategorized=True)
        result = classifier.validate_batch([_candidate("site_report.pdf")], [])
        assert _names(result.accepted) == ["site_report.pdf"]

    def test_still_rejects_malformed_names(self) -> None:
        classifier = FilenameClassifier(allow_uncategorized=True)
        result = classifier.validate_batch([_candidate("randomfile.jpg")], [])
        assert result.rejected[0].reason is RejectionReason.MALFORMED_NAME

    def test_still_enforces_kind_for_known_categories(self) -> None:
        classifier = FilenameClassifier(allow_uncategorized=True)
        result = classifier.validate_batch([_candidate("ts_cbm.jpg")], [])
        assert result.rejected[0].reason is RejectionReason.FILE_KIND_MISMATCH
