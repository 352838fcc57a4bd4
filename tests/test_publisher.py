"""Tests for the two-phase publisher."""

import asyncio

import pytest

from resizepost.config import PREDEFINED_SIZES
from resizepost.models import ResizedImage
from resizepost.services.publisher import PublishError, Publisher
from resizepost.services.twitter import MediaUploadError, PostCreationError


@pytest.fixture
def images() -> list[ResizedImage]:
    return [
        ResizedImage(content=f"img-{size}".encode(), size=size, content_type="image/jpeg")
        for size in PREDEFINED_SIZES
    ]


class TestUploadPhase:

    @pytest.mark.asyncio
    async def test_all_uploads_succeed(self, publisher, mock_twitter, images):
        report = await publisher.publish(images)

        assert [call.args[0] for call in mock_twitter.upload_media.await_args_list] == [
            img.content for img in images
        ]
        assert report.media_ids == ["m1", "m2", "m3", "m4"]
        assert report.uploaded == 4
        assert all(r.ok for r in report.results)

    @pytest.mark.asyncio
    async def test_failed_uploads_are_omitted_not_padded(self, publisher, mock_twitter, images):
        mock_twitter.upload_media.side_effect = [
            "m1",
            MediaUploadError(400, "bad"),
            "m3",
            MediaUploadError(500, "down"),
        ]

        report = await publisher.publish(images)

        assert mock_twitter.upload_media.await_count == 4
        assert report.media_ids == ["m1", "m3"]
        assert [r.ok for r in report.results] == [True, False, True, False]
        assert report.results[1].size == PREDEFINED_SIZES[1]
        assert "bad" in report.results[1].error

    @pytest.mark.asyncio
    async def test_concurrent_uploads_keep_submission_order(self, mock_twitter, images):
        async def upload(data):
            # Later images finish first
            index = [img.content for img in images].index(data)
            await asyncio.sleep(0.01 * (len(images) - index))
            return f"id-{index}"

        mock_twitter.upload_media.side_effect = upload
        publisher = Publisher(mock_twitter, concurrent=True)

        report = await publisher.publish(images)

        assert report.media_ids == ["id-0", "id-1", "id-2", "id-3"]
        mock_twitter.create_post.assert_awaited_once_with(
            "Automatically resized images!", ["id-0", "id-1", "id-2", "id-3"]
        )


class TestPostPhase:

    @pytest.mark.asyncio
    async def test_one_post_with_all_ids(self, publisher, mock_twitter, images):
        report = await publisher.publish(images)

        mock_twitter.create_post.assert_awaited_once_with(
            "Automatically resized images!", ["m1", "m2", "m3", "m4"]
        )
        assert report.post_id == "post-1"
        assert report.posted

    @pytest.mark.asyncio
    async def test_no_post_when_every_upload_fails(self, publisher, mock_twitter, images):
        mock_twitter.upload_media.side_effect = MediaUploadError(503, "unavailable")

        report = await publisher.publish(images)

        mock_twitter.create_post.assert_not_awaited()
        assert report.media_ids == []
        assert not report.posted
        assert report.post_error is None

    @pytest.mark.asyncio
    async def test_two_of_four_failures_post_survivors_in_order(self, publisher, mock_twitter, images):
        mock_twitter.upload_media.side_effect = [
            MediaUploadError(400, "bad"),
            "m2",
            MediaUploadError(400, "bad"),
            "m4",
        ]

        await publisher.publish(images)

        mock_twitter.create_post.assert_awaited_once_with("Automatically resized images!", ["m2", "m4"])

    @pytest.mark.asyncio
    async def test_post_failure_is_recorded_not_raised(self, publisher, mock_twitter, images):
        mock_twitter.create_post.side_effect = PostCreationError(403, "duplicate status")

        report = await publisher.publish(images)

        assert report.uploaded == 4
        assert not report.posted
        assert "duplicate status" in report.post_error

    @pytest.mark.asyncio
    async def test_custom_caption(self, mock_twitter, images):
        await Publisher(mock_twitter, caption="Banners").publish(images)
        assert mock_twitter.create_post.await_args.args[0] == "Banners"


class TestOuterBoundary:

    @pytest.mark.asyncio
    async def test_unexpected_upload_error_only_drops_that_image(self, publisher, mock_twitter, images):
        mock_twitter.upload_media.side_effect = ["m1", AttributeError("no .get on list"), "m3", "m4"]

        report = await publisher.publish(images)

        assert mock_twitter.upload_media.await_count == 4
        assert report.media_ids == ["m1", "m3", "m4"]
        assert "AttributeError" in report.results[1].error
        mock_twitter.create_post.assert_awaited_once_with("Automatically resized images!", ["m1", "m3", "m4"])

    @pytest.mark.asyncio
    async def test_unexpected_error_with_concurrent_uploads(self, mock_twitter, images):
        mock_twitter.upload_media.side_effect = ["m1", RuntimeError("boom"), "m3", "m4"]

        report = await Publisher(mock_twitter, concurrent=True).publish(images)

        assert [r.ok for r in report.results] == [True, False, True, True]
        assert report.posted

    @pytest.mark.asyncio
    async def test_unexpected_post_error_is_recorded(self, publisher, mock_twitter, images):
        mock_twitter.create_post.side_effect = RuntimeError("socket closed")

        report = await publisher.publish(images)

        assert report.uploaded == 4
        assert not report.posted
        assert "socket closed" in report.post_error

    @pytest.mark.asyncio
    async def test_invalid_input_becomes_publish_error(self, publisher):
        with pytest.raises(PublishError) as exc_info:
            await publisher.publish(None)
        assert isinstance(exc_info.value.__cause__, TypeError)

    @pytest.mark.asyncio
    async def test_close_closes_client(self, publisher, mock_twitter):
        await publisher.close()
        mock_twitter.close.assert_awaited_once()
