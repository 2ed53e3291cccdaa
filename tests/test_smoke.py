import subprocess
import sys


def test_cli_help():
    proc = subprocess.run([sys.executable, "-m", "imgloader", "--help"], capture_output=True, text=True)
    assert proc.returncode == 0
    assert "CLI для загрузки изображений" in proc.stdout


def test_imports():
    import imgloader
    import imgloader.main
    import imgloader.models
    import imgloader.config
    import imgloader.pipeline
