"""Test the driver and the command line interface end to end."""

import os

import pytest

from mcselect import Driver
from mcselect.bin.cli import cli
from mcselect.data import MCParticleFlag
from mcselect.errors import MissingInputError, RegistryError
from mcselect.io import HDF5Reader, HDF5Writer


@pytest.fixture(name="truth_file")
def fixture_truth_file(tmp_path, make_track):
    """Writes two truth events to an HDF5 file."""
    path = os.path.join(tmp_path, "truth.h5")
    writer = HDF5Writer(path, fmt="truth")
    writer.write(
        [
            {
                "tracks": [
                    make_track(0),
                    make_track(1, eta=2.0),
                    make_track(2, pdg_code=2112, charge=0),
                    make_track(3, mother_id=0, process_code=4),
                ],
                "num_primaries": 3,
            },
            {
                "tracks": [make_track(0, status_code=2), make_track(1)],
                "num_primaries": 2,
            },
        ]
    )

    return path


@pytest.fixture(name="flat_file")
def fixture_flat_file(tmp_path, flat_particles):
    """Writes one flat event to an HDF5 file."""
    path = os.path.join(tmp_path, "flat.h5")
    HDF5Writer(path).append({"mcparticles": flat_particles})

    return path


def config(file_keys, tasks=None, writer=None):
    """Builds a driver configuration."""
    cfg = {
        "base": {"verbosity": "warning"},
        "io": {"reader": {"name": "hdf5", "file_keys": file_keys}},
        "tasks": tasks if tasks is not None else {"mc_track_selector": {}},
    }
    if writer is not None:
        cfg["io"]["writer"] = writer

    return cfg


class TestDriver:
    """Test the processing of entries by the driver."""

    def test_truth(self, truth_file):
        """Test the selection of truth events."""
        tasks = {"mc_track_selector": {"reject_k0l_neutron": True}}
        driver = Driver(config(truth_file, tasks))
        assert len(driver) == 2

        data = driver.process(0)
        assert [p.label for p in data["MCParticlesSelected"]] == [0, 3]
        assert data["MCParticlesSelected_Map"].mapped() == {0: 0, 3: 1}
        assert data["MCParticlesSelected"][1].flags == MCParticleFlag.PHYSICAL_PRIMARY

        # The published objects are the same from one entry to the next
        second = driver.process(1)
        assert second["event"] is data["event"]
        assert second["MCParticlesSelected"] is data["MCParticlesSelected"]
        assert [p.label for p in second["MCParticlesSelected"]] == [1]

    def test_flat(self, flat_file):
        """Test the selection of flat events."""
        driver = Driver(config(flat_file))
        data = driver.process(0)

        assert data["event"].find_object("mcparticles") is not None
        assert data["MCParticlesSelected_Map"].mapped() == {0: 0, 2: 1, 4: 2}

    def test_run(self, truth_file):
        """Test that the driver loops over every entry."""
        driver = Driver(config(truth_file))
        driver.run()
        assert driver.num_processed == 2

    def test_duplicate_selectors(self, truth_file):
        """Test that the run stops when two selectors share a name."""
        tasks = {
            "first": {"name": "mc_track_selector"},
            "second": {"name": "mc_track_selector"},
        }
        driver = Driver(config(truth_file, tasks))
        with pytest.raises(RegistryError):
            driver.run()
        assert driver.num_processed == 0

    def test_failure_recovery(self, truth_file):
        """Test that an entry can be processed again after a fatal error."""
        driver = Driver(config(truth_file))
        tasks = driver.tasks

        def fail(data):
            raise MissingInputError("No input for this event")

        driver.tasks = fail
        with pytest.raises(MissingInputError):
            driver.process(0)
        assert not any(driver.watch.running(key) for key in driver.watch.keys())

        driver.tasks = tasks
        data = driver.process(0)
        assert [p.label for p in data["MCParticlesSelected"]] == [0, 2, 3]

    def test_missing_reader(self):
        """Test that a reader must be configured."""
        with pytest.raises(AssertionError, match="reader"):
            Driver({"io": {}})

    def test_csv_writer(self, truth_file, tmp_path):
        """Test that the selected particles can be stored in CSV format."""
        path = os.path.join(tmp_path, "selected.csv")
        driver = Driver(config(truth_file, writer={"name": "csv", "file_name": path}))
        driver.run()

        with open(path, "r", encoding="utf-8") as in_file:
            lines = in_file.read().splitlines()
        header = lines[0].split(",")
        rows = [dict(zip(header, line.split(","))) for line in lines[1:]]
        assert [(r["index"], r["label"]) for r in rows] == [
            ("0", "0"),
            ("0", "2"),
            ("0", "3"),
            ("1", "1"),
        ]

    def test_csv_source_index(self, tmp_path, make_particle):
        """Test that the CSV rows point back to the flat input positions."""
        path = os.path.join(tmp_path, "flat.h5")
        HDF5Writer(path).append(
            {
                "mcparticles": [
                    make_particle(7),
                    make_particle(9, flags=MCParticleFlag.PRIMARY),
                    make_particle(12),
                ]
            }
        )

        output = os.path.join(tmp_path, "selected.csv")
        driver = Driver(config(path, writer={"name": "csv", "file_name": output}))
        driver.run()

        with open(output, "r", encoding="utf-8") as in_file:
            lines = in_file.read().splitlines()
        header = lines[0].split(",")
        rows = [dict(zip(header, line.split(","))) for line in lines[1:]]
        assert {int(r["source_index"]): int(r["output_index"]) for r in rows} == {
            0: 0,
            2: 1,
        }
        assert [r["label"] for r in rows] == ["7", "12"]

    def test_hdf5_writer(self, truth_file, tmp_path):
        """Test that the selection can be stored and selected again."""
        path = os.path.join(tmp_path, "selected.h5")
        driver = Driver(config(truth_file, writer={"name": "hdf5", "file_name": path}))
        driver.run()

        reader = HDF5Reader(path)
        assert len(reader) == 2
        assert [p.label for p in reader[0]["mcparticles"]] == [0, 2, 3]

        # Selecting the selection again does not change it
        rerun = Driver(config(path))
        data = rerun.process(0)
        assert [p.label for p in data["MCParticlesSelected"]] == [0, 2, 3]
        assert data["MCParticlesSelected_Map"].mapped() == {0: 0, 1: 1, 2: 2}


class TestCLI:
    """Test the command line interface."""

    def test_cli(self, truth_file, tmp_path):
        """Test that the command line arguments reach the configuration."""
        cfg_path = tmp_path / "select.yaml"
        cfg_path.write_text("""
base:
  verbosity: warning
io:
  reader:
    name: hdf5
    file_keys: missing.h5
  writer:
    name: csv
    file_name: missing.csv
tasks:
  mc_track_selector:
    eta_max: 1.0
""")
        output = os.path.join(tmp_path, "selected.csv")
        cli(
            [
                "-c",
                str(cfg_path),
                "-s",
                truth_file,
                "-o",
                output,
                "-n",
                "1",
                "--set",
                "tasks.mc_track_selector.only_physical_primary=false",
            ]
        )

        with open(output, "r", encoding="utf-8") as in_file:
            lines = in_file.read().splitlines()
        assert len(lines) == 4

    def test_cli_bad_override(self, truth_file, tmp_path):
        """Test that malformed overrides are rejected."""
        cfg_path = tmp_path / "select.yaml"
        cfg_path.write_text("io:\n  reader:\n    name: hdf5\n")
        with pytest.raises(ValueError, match="Invalid --set format"):
            cli(["-c", str(cfg_path), "-s", truth_file, "--set", "base.verbosity"])
