import pytest

from sticker_pipeline.assets import ImageFile
from sticker_pipeline.errors import SelectionAborted
from sticker_pipeline.selector import display_images, select_image


def _scripted(*answers):
    answers = list(answers)
    prompts = []

    def read(prompt):
        prompts.append(prompt)
        if not answers:
            raise EOFError
        return answers.pop(0)

    return read, prompts


@pytest.fixture
def files(tmp_path):
    return [ImageFile(name, tmp_path) for name in ("01.png", "02.png", "03.png")]


def test_select_rejects_invalid_answers_until_valid(files):
    read, prompts = _scripted("abc", "0", "4", "", "-1", "+1", "1_0", "\u0662", "2")
    messages = []

    index = select_image("main.png", files, read=read, echo=messages.append)

    assert index == 1
    assert len(prompts) == 9
    assert prompts[0] == "Choose the image for main.png (1-3): "
    assert sum(m.startswith("❌") for m in messages) == 8
    assert messages[-1] == "✅ Selected 02.png"


@pytest.mark.parametrize("answer, expected", [("1", 0), (" 3 \n", 2)])
def test_select_accepts_bounds(files, answer, expected):
    read, prompts = _scripted(answer)

    assert select_image("tab.png", files, read=read, echo=lambda _: None) == expected
    assert len(prompts) == 1


def test_select_aborts_on_end_of_input(files):
    read, _ = _scripted("x")

    with pytest.raises(SelectionAborted):
        select_image("main.png", files, read=read, echo=lambda _: None)


def test_select_requires_choices():
    with pytest.raises(ValueError):
        select_image("main.png", [], read=lambda _: "1", echo=lambda _: None)


def test_display_images_is_one_indexed(files):
    messages = []

    display_images(files, echo=messages.append)

    assert " 1. 01.png" in messages
    assert " 3. 03.png" in messages


def test_select_only_takes_plain_ascii_numbers(tmp_path):
    many = [ImageFile(f"{i:02d}.png", tmp_path) for i in range(1, 13)]
    read, prompts = _scripted("1_0", "١٠", "10")

    index = select_image("tab.png", many, read=read, echo=lambda _: None)

    assert index == 9
    assert len(prompts) == 3
