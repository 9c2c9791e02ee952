import re

from DOGMARKET.media.upload import build_upload_filename


def test_upload_filename_replaces_whitespace():
    name = build_upload_filename("chew  toy\tbig.png")
    assert re.fullmatch(r"\d+-chew_toy_big\.png", name)


def test_upload_filename_drops_directories():
    assert build_upload_filename("../../etc/dog photo.jpg").endswith("-dog_photo.jpg")


def test_upload_filename_without_original_name():
    assert build_upload_filename(None).endswith("-upload")
