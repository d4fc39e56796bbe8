import pytest
from PIL import Image

from asciigen import cli
from asciigen.charsets import CharacterSet
from asciigen.constants import DitherMethod


@pytest.fixture
def white_png(tmp_path):
    path = tmp_path / 'white.png'
    Image.new('RGB', (8, 4), (255, 255, 255)).save(path)
    return path


def parse(*argv):
    return cli.create_argument_parser().parse_args(list(argv))


def test_defaults():
    options = cli.options_from_args(parse('in.png'))
    assert options.columns == 120
    assert options.charset == CharacterSet.STANDARD
    assert options.dither_method == DitherMethod.NONE
    assert not options.color_mode


def test_flags_override_preset():
    options = cli.options_from_args(parse('in.png', '--preset', 'matrix', '-w', '40', '--dither', 'none'))
    assert options.columns == 40
    assert options.dither_method == DitherMethod.NONE
    assert options.inverted
    assert options.color_mode


def test_charset_name_or_literal():
    assert cli.options_from_args(parse('in.png', '--charset', 'blocks')).charset == CharacterSet.BLOCKS
    assert cli.options_from_args(parse('in.png', '--charset', 'xo ')).charset == 'xo '


def test_list_charsets(capsys):
    assert cli.main(['--list-charsets']) == 0
    out = capsys.readouterr().out
    for name in CharacterSet.names():
        assert name in out


def test_no_input_prints_help(capsys):
    assert cli.main([]) == 1
    assert 'usage:' in capsys.readouterr().out


def test_missing_file(tmp_path, capsys):
    assert cli.main([str(tmp_path / 'nope.png')]) == 1
    assert capsys.readouterr().err.startswith('Error:')


def test_prints_art(white_png, capsys):
    assert cli.main([str(white_png), '-w', '4', '--charset', '@ ']) == 0
    assert capsys.readouterr().out == '@@@@\n'


def test_prints_ansi_in_color(white_png, capsys):
    assert cli.main([str(white_png), '-w', '4', '--charset', '@ ', '-c']) == 0
    assert capsys.readouterr().out == '\033[38;2;255;255;255m@@@@\033[0m\n'


@pytest.mark.parametrize('name, marker', [
    ('art.txt', '@@@@\n'),
    ('art.html', '<!DOCTYPE html>'),
    ('art.ansi', '\033[0m'),
])
def test_writes_text_outputs(white_png, tmp_path, capsys, name, marker):
    output = tmp_path / name
    assert cli.main([str(white_png), '-w', '4', '--charset', '@ ', '-c', '-o', str(output)]) == 0
    assert marker in output.read_text(encoding='utf-8')
    assert capsys.readouterr().out == f'Saved to {output}\n'


def test_writes_png(white_png, tmp_path):
    output = tmp_path / 'art.png'
    assert cli.main([str(white_png), '-w', '4', '--charset', '@ ', '-o', str(output)]) == 0
    with Image.open(output) as image:
        assert image.format == 'PNG'


def test_gif_to_gif(tmp_path, capsys):
    source = tmp_path / 'in.gif'
    frames = [Image.new('RGB', (8, 4), color) for color in ((0, 0, 0), (255, 255, 255))]
    frames[0].save(source, save_all=True, append_images=frames[1:], duration=100)
    output = tmp_path / 'out.gif'

    assert cli.main([str(source), '-w', '4', '--charset', '@ ', '-o', str(output)]) == 0
    captured = capsys.readouterr()
    assert captured.out == f'Saved 2 frames to {output}\n'
    assert '100%' in captured.err


def test_video_needs_output(capsys):
    assert cli.main(['clip.mp4']) == 1
    assert 'gif' in capsys.readouterr().err


def test_zero_gamma_does_not_crash(white_png, capsys):
    assert cli.main([str(white_png), '-w', '4', '--charset', '@ ', '--gamma', '0']) == 0
    assert capsys.readouterr().out == '@@@@\n'


@pytest.mark.parametrize('fps', ['0', '-3', 'ten'])
def test_fps_must_be_positive(fps, capsys):
    with pytest.raises(SystemExit) as excinfo:
        parse('in.gif', '--fps', fps)
    assert excinfo.value.code == 2
    assert '--fps' in capsys.readouterr().err
