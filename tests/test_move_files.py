from tools import move_files


def make_files(directory, names=move_files.FILES):
    directory.mkdir(parents=True, exist_ok=True)
    for name in names:
        (directory / name).write_text(f"content of {name}", encoding="utf-8")


def test_copy_to_temp(tmp_path):
    make_files(tmp_path / "dist" / "workflow")
    copied = move_files.copy_to_temp(tmp_path)

    assert len(copied) == 4
    for name in move_files.FILES:
        assert (tmp_path / "assets" / name).read_text(encoding="utf-8") == f"content of {name}"


def test_copy_from_temp(tmp_path):
    make_files(tmp_path / "assets")
    move_files.copy_from_temp(tmp_path)

    for name in move_files.FILES:
        assert (tmp_path / "dist" / "workflow" / name).exists()


def test_missing_file_is_skipped(tmp_path):
    make_files(tmp_path / "assets", ["info.plist", "icon.png"])
    copied = move_files.copy_from_temp(tmp_path)
    assert [p.name for p in copied] == ["info.plist", "icon.png"]


def test_main_uses_working_directory(tmp_path):
    # conftest runs every test from tmp_path
    make_files(tmp_path / "dist" / "workflow")
    assert move_files.main(["copyToTemp"]) == 0
    assert (tmp_path / "assets" / "check-node.sh").exists()


def test_usage_without_command(capsys, tmp_path):
    assert move_files.main([]) == 0
    assert move_files.main(["copyEverywhere"]) == 0
    out = capsys.readouterr().out
    assert out.splitlines() == [move_files.USAGE, move_files.USAGE]
    assert "copyToTemp | copyFromTemp" in out
    assert not (tmp_path / "assets").exists()
