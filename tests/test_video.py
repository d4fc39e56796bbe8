import os
import subprocess

import numpy as np
import pytest
from PIL import Image

from asciigen import video
from asciigen.engine import AsciiOptions
from asciigen.errors import FFmpegError, RasterError

from conftest import solid_raster


COLORS = [(255, 0, 0), (0, 255, 0), (0, 0, 255)]


@pytest.fixture
def animated_gif(tmp_path):
    path = tmp_path / 'clip.gif'
    frames = [Image.new('RGB', (16, 8), color) for color in COLORS]
    frames[0].save(path, save_all=True, append_images=frames[1:], duration=100, loop=0)
    return path


def test_is_video():
    assert video.is_video('clip.MP4')
    assert video.is_video('a/b/c.webm')
    assert not video.is_video('clip.gif')
    assert not video.is_video('noext')


def test_iter_image_frames(animated_gif):
    frames = list(video.iter_image_frames(animated_gif))
    assert len(frames) == 3
    for frame, color in zip(frames, COLORS):
        assert (frame.width, frame.height) == (16, 8)
        assert tuple(frame.to_array()[0, 0]) == color + (255,)


def test_iter_image_frames_rejects_garbage(tmp_path):
    path = tmp_path / 'bad.gif'
    path.write_bytes(b'not an image')
    with pytest.raises(RasterError):
        list(video.iter_image_frames(path))


def test_convert_frames_reports_progress():
    frames = [solid_raster(8, 4, (v, v, v, 255)) for v in (0, 128, 255)]
    calls = []
    texts = video.convert_frames(frames, AsciiOptions(columns=4, charset='@ ', color_mode=True),
                                 progress=lambda done, total: calls.append((done, total)))
    assert calls == [(1, 3), (2, 3), (3, 3)]
    assert texts[0] == '    \n'
    assert texts[2] == '@@@@\n'
    assert all(isinstance(text, str) for text in texts)


def test_animate_gif_to_gif(animated_gif, tmp_path):
    output = tmp_path / 'ascii.gif'
    texts = video.animate(animated_gif, output, AsciiOptions(columns=8, charset='@%#*+=-:. '), fps=5)
    assert len(texts) == 3
    assert len(set(texts)) == 3
    with Image.open(output) as image:
        assert image.n_frames == 3
        assert image.info['duration'] == 200


def test_extract_video_frames(monkeypatch):
    work_dirs = []

    def fake_extract(path, out_pattern, fps, max_seconds, scale_width):
        assert (fps, max_seconds, scale_width) == (4, 2, 32)
        for index in (2, 1):
            arr = np.full((4, 8, 3), index * 100, dtype=np.uint8)
            Image.fromarray(arr).save(out_pattern % index)
        work_dirs.append(os.path.dirname(out_pattern))

    monkeypatch.setattr(video.FFmpeg, 'extract_frames', fake_extract)
    frames = video.extract_video_frames('clip.mp4', fps=4, max_seconds=2, scale_width=32)

    assert [tuple(frame.to_array()[0, 0]) for frame in frames] == [(100, 100, 100, 255), (200, 200, 200, 255)]
    assert not os.path.exists(work_dirs[0])


def test_missing_ffmpeg(monkeypatch):
    def missing(*args, **kwargs):
        raise FileNotFoundError('ffmpeg')

    monkeypatch.setattr(subprocess, 'run', missing)
    with pytest.raises(FFmpegError, match='not found'):
        video.FFmpeg.extract_frames('clip.mp4', 'frame%03d.png')


def test_ffmpeg_failure(monkeypatch):
    monkeypatch.setattr(video, 'run', lambda *args: (1, 'ffmpeg version x\nclip.mp4: Invalid data'))
    with pytest.raises(FFmpegError, match='Invalid data'):
        video.FFmpeg.extract_frames('clip.mp4', 'frame%03d.png')


def test_ffmpeg_command_line(monkeypatch):
    commands = []

    class Completed:
        returncode = 0
        stderr = ''

    def fake_run(command, **kwargs):
        commands.append(command)
        return Completed()

    monkeypatch.setattr(subprocess, 'run', fake_run)
    video.FFmpeg.extract_frames('clip.mp4', 'out/frame%03d.png', fps=12, max_seconds=3, scale_width=200)
    assert commands == [[
        'ffmpeg', '-i', 'clip.mp4', '-t', '3', '-vf', 'fps=12,scale=200:-1', 'out/frame%03d.png'
    ]]
