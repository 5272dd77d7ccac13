from __future__ import annotations

import unittest
import uuid

from collab_docs.db.models import Image
from collab_docs.service import (
    anonymized_image_name,
    create_document,
    create_image,
    delete_image,
    get_image,
    get_images_for_document,
)
from collab_docs.storage import MemoryImageBucket
from collab_docs.store import MemoryStore, RecordNotFoundError


class AnonymizedImageNameTests(unittest.TestCase):
    def test_keeps_only_the_extension(self) -> None:
        self.assertEqual(anonymized_image_name("test.png"), "image.png")
        self.assertEqual(anonymized_image_name("archive.tar.gif"), "image.gif")

    def test_extension_case_is_kept(self) -> None:
        self.assertEqual(anonymized_image_name("My Holiday (1).JPEG"), "image.JPEG")

    def test_strips_directories(self) -> None:
        self.assertEqual(anonymized_image_name("../../etc/passwd.png"), "image.png")
        self.assertEqual(anonymized_image_name("C:\\Users\\alice\\scan.webp"), "image.webp")

    def test_no_extension(self) -> None:
        self.assertEqual(anonymized_image_name("README"), "image")
        self.assertEqual(anonymized_image_name(""), "image")
        self.assertEqual(anonymized_image_name(None), "image")


class CreateImageTests(unittest.TestCase):
    def setUp(self) -> None:
        self.store = MemoryStore()
        self.document = create_document(self.store)

    def test_creates_an_image(self) -> None:
        image = create_image(self.store, self.document.id, "image/png", "test.png")

        self.assertIsNotNone(get_image(self.store, image.id))
        self.assertEqual(image.document_id, self.document.id)
        self.assertEqual(image.mimetype, "image/png")

    def test_sets_an_anonymized_name(self) -> None:
        image = create_image(self.store, self.document.id, "image/png", "secret-project-plan.png")

        self.assertEqual(image.name, "image.png")

    def test_requires_an_existing_document(self) -> None:
        with self.assertRaises(RecordNotFoundError):
            create_image(self.store, str(uuid.uuid4()), "image/png", "test.png")
        with self.assertRaises(RecordNotFoundError):
            create_image(self.store, "invalid", "image/png", "test.png")

        self.assertEqual(self.store.find_many(Image), [])

    def test_lists_images_of_a_document(self) -> None:
        other = create_document(self.store)
        first = create_image(self.store, self.document.id, "image/png", "a.png")
        second = create_image(self.store, self.document.id, "image/gif", "b.gif")
        create_image(self.store, other.id, "image/png", "c.png")

        images = get_images_for_document(self.store, self.document.id)

        self.assertEqual([image.id for image in images], [first.id, second.id])


class GetImageTests(unittest.TestCase):
    def setUp(self) -> None:
        self.store = MemoryStore()
        self.document = create_document(self.store)

    def test_gets_an_image(self) -> None:
        image = create_image(self.store, self.document.id, "image/png", "test.png")

        self.assertIs(get_image(self.store, image.id), image)

    def test_returns_none_if_the_image_does_not_exist(self) -> None:
        self.assertIsNone(get_image(self.store, str(uuid.uuid4())))

    def test_returns_none_for_missing_or_malformed_id(self) -> None:
        self.assertIsNone(get_image(self.store, None))
        self.assertIsNone(get_image(self.store, "not-an-id"))


class DeleteImageTests(unittest.TestCase):
    def setUp(self) -> None:
        self.store = MemoryStore()
        self.document = create_document(self.store)

    def test_deletes_an_image(self) -> None:
        image = create_image(self.store, self.document.id, "image/png", "test.png")

        deleted = delete_image(self.store, image.id)

        self.assertEqual(deleted.id, image.id)
        self.assertIsNone(get_image(self.store, image.id))

    def test_missing_image_raises(self) -> None:
        with self.assertRaises(RecordNotFoundError):
            delete_image(self.store, str(uuid.uuid4()))

    def test_does_not_touch_object_storage(self) -> None:
        bucket = MemoryImageBucket()
        image = create_image(self.store, self.document.id, "image/png", "test.png")
        bucket.put_image(image.id, b"bytes", "image/png")

        delete_image(self.store, image.id)

        self.assertEqual(bucket.get_image(image.id), b"bytes")


if __name__ == "__main__":
    unittest.main()
