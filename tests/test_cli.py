"""
Test the command line interface.
"""


class TestCommandLine:

    def test_full_run(self, cli_runner, create_capture_files, source_dir, quarantine_dir,
                      state_dir, list_names):
        create_capture_files([
            {"name": "IMG_0001.MOV", "mtime": 100},
            {"name": "IMG_0001.HEIC", "mtime": 100},
            {"name": "IMG_9999.MOV", "mtime": 999},
        ])

        result = cli_runner(source_dir, root_dir=state_dir)

        assert result.exit_code == 0
        assert "Processing completed successfully" in result.output
        assert "Processing Summary" in result.output
        assert list_names(quarantine_dir) == ["IMG_9999.MOV"]

    def test_explicit_quarantine_and_dest(self, cli_runner, create_capture_files, source_dir,
                                          tmp_path, state_dir, list_names):
        create_capture_files([
            {"name": "IMG_00021.MOV", "mtime": 200},
            {"name": "IMG_00021.HEIC", "mtime": 200},
            {"name": "stray.txt"},
        ])
        quarantine = tmp_path / "junk"
        dest_root = tmp_path / "library"

        result = cli_runner(source_dir, "--quarantine", quarantine, "--dest-root", dest_root,
                            root_dir=state_dir)

        assert result.exit_code == 0
        assert list_names(quarantine) == ["stray.txt"]
        assert list_names(dest_root / "100APPLE") == ["IMG_0002.HEIC", "IMG_0002.mov"]

    def test_defaults_sit_beside_source(self, cli_runner, create_capture_files, source_dir,
                                        card_root, state_dir):
        create_capture_files([{"name": "IMG_0001.MOV"}])

        result = cli_runner(source_dir, root_dir=state_dir)

        assert result.exit_code == 0
        assert (card_root / "Other" / "IMG_0001.MOV").exists()
        assert "Processing Plan" in result.output

    def test_no_preferences_file_is_written(self, cli_runner, create_capture_files, source_dir,
                                            state_dir):
        create_capture_files([{"name": "IMG_0001.MOV"}])

        cli_runner(source_dir, root_dir=state_dir)

        assert not list(state_dir.glob("*.yml"))

    def test_missing_source(self, cli_runner, tmp_path, state_dir):
        result = cli_runner(tmp_path / "nope", root_dir=state_dir)

        assert result.exit_code == 1
        assert "does not exist" in result.output

    def test_source_required(self, cli_runner, state_dir):
        result = cli_runner(root_dir=state_dir)

        assert result.exit_code == 2

    def test_quarantine_must_differ_from_source(self, cli_runner, source_dir, state_dir):
        result = cli_runner(source_dir, "--quarantine", source_dir, root_dir=state_dir)

        assert result.exit_code == 1
        assert "must differ" in result.output

    def test_version(self, cli_runner, state_dir):
        from livepair import __version__

        result = cli_runner("--version", root_dir=state_dir)

        assert result.exit_code == 0
        assert __version__ in result.output
