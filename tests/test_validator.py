"""
Unit tests for validator module (uploaded photo files)
"""

import io

import pytest
from PIL import Image

from inspection_core.config import MAX_FILE_SIZE_MB
from inspection_core.models import ContractError, InvalidUploadError
from inspection_core.validator import ensure_valid_uploads, validate_upload


# ============================================================================
# SINGLE FILE CHECKS
# ============================================================================

class TestValidateUpload:
    """Test single file checks"""

    def test_valid_jpeg(self, make_upload):
        """Valid JPEG should pass all checks"""
        result = validate_upload(make_upload("front.jpg"))

        assert result.is_valid is True
        assert result.format == "JPEG"
        assert result.resolution == (64, 48)
        assert result.error_message is None

    def test_valid_png(self, make_upload, png_bytes):
        """Valid PNG should pass all checks"""
        result = validate_upload(make_upload("front.png", "image/png", png_bytes))

        assert result.is_valid is True
        assert result.format == "PNG"

    def test_uppercase_extension(self, make_upload):
        """Extension check ignores case"""
        assert validate_upload(make_upload("FRONT.JPEG")).is_valid is True

    def test_file_too_large(self, make_upload):
        """File over MAX_FILE_SIZE_MB should fail"""
        size = int((MAX_FILE_SIZE_MB + 0.1) * 1024 * 1024)
        result = validate_upload(make_upload(content=b"x" * size))

        assert result.is_valid is False
        assert "exceeds the size limit of 5 MB" in result.error_message
        assert result.size_bytes == size

    def test_wrong_mime_type(self, make_upload):
        """Non-image MIME type should fail"""
        result = validate_upload(make_upload("scan.jpg", "application/pdf"))

        assert result.is_valid is False
        assert "invalid type" in result.error_message

    def test_wrong_extension(self, make_upload):
        """BMP extension should fail"""
        result = validate_upload(make_upload("scan.bmp"))

        assert result.is_valid is False
        assert "Only JPG, JPEG, and PNG are allowed" in result.error_message

    def test_unreadable_content(self, make_upload):
        """Random bytes should fail"""
        result = validate_upload(make_upload(content=b"not an image at all"))

        assert result.is_valid is False
        assert "not a readable image" in result.error_message

    def test_content_does_not_match_extension(self, make_upload):
        """GIF content named .png should fail"""
        img = Image.new("RGB", (10, 10), color="purple")
        buf = io.BytesIO()
        img.save(buf, format="GIF")

        result = validate_upload(make_upload("disguised.png", "image/png", buf.getvalue()))

        assert result.is_valid is False
        assert result.format == "GIF"
        assert "does not match its extension" in result.error_message


# ============================================================================
# BATCH CHECKS
# ============================================================================

class TestEnsureValidUploads:
    """Test checks over all files of a request"""

    def test_all_valid(self, make_upload):
        """All valid files return results"""
        results = ensure_valid_uploads([make_upload("a.jpg"), make_upload("b.jpg")])
        assert [r.filename for r in results] == ["a.jpg", "b.jpg"]

    @pytest.mark.parametrize("files", [None, []])
    def test_no_files(self, files):
        """No files should fail"""
        with pytest.raises(InvalidUploadError, match="At least one file must be uploaded."):
            ensure_valid_uploads(files)

    def test_first_rejection_raised(self, make_upload):
        """First bad file is the one reported"""
        files = [make_upload("a.jpg"), make_upload("b.txt", "text/plain"), make_upload("c.exe", "x/y")]

        with pytest.raises(InvalidUploadError) as exc:
            ensure_valid_uploads(files)

        assert "b.txt" in str(exc.value)
        assert isinstance(exc.value, ContractError)
        assert exc.value.code == "INVALID_FILE"
