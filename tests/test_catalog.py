"""
Unit tests for building models from parameter records.
"""

import numpy as np
import pytest
import yaml

from ComposeVis import Gaussian
from ComposeVis.exceptions import ConfigurationError
from ComposeVis.model import (
    AddModel, ConvolvedModel, MRing, RenormalizedModel, ShiftedModel, StretchedModel, RotatedModel,
    build_model, build_composite, list_available_models, get_model_info, load_model_catalog,
)
from ComposeVis.utils import fwhm_to_sigma


class TestCatalog:

    def test_available_models(self):
        names = list_available_models()
        for name in ('gaussian', 'disk', 'ring', 'mring', 'crescent', 'point', 'extended_ring'):
            assert name in names

    def test_model_info_by_alias(self):
        info = get_model_info('Gauss')
        assert info['model_type'] == 'Gaussian'

    def test_unknown_model_info(self):
        with pytest.raises(ConfigurationError):
            get_model_info('nfw')

    def test_custom_catalog_file(self, tmp_path):
        path = tmp_path / "models.yml"
        path.write_text(yaml.safe_dump({'models': {'blob': {'model_type': 'Gaussian', 'parameters': {}}}}))
        catalog = load_model_catalog(path)
        m = build_model({'type': 'blob', 'size': 2.0}, catalog=catalog)
        assert isinstance(m, StretchedModel)

    def test_missing_catalog_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_model_catalog(tmp_path / "absent.yml")


class TestBuildModel:

    def test_placement_order(self):
        m = build_model({'type': 'Gaussian', 'fwhm': 20.0, 'angle': 0.3, 'x0': 5.0, 'flux': 0.5})
        assert isinstance(m, RenormalizedModel)
        assert m.flux() == 0.5
        shift = m.model
        assert isinstance(shift, ShiftedModel)
        assert (shift.dx, shift.dy) == (5.0, 0.0)
        rot = shift.model
        assert isinstance(rot, RotatedModel)
        stretch = rot.model
        assert isinstance(stretch, StretchedModel)
        np.testing.assert_allclose(stretch.alpha, fwhm_to_sigma(20.0))
        assert isinstance(stretch.model, Gaussian)

    def test_matches_hand_built_model(self):
        m = build_model({'TYPE': 'disk', 'Diameter': 40.0, 'dx': 3.0, 'dy': -2.0})
        u, v = np.array([0.01, -0.02]), np.array([0.005, 0.03])
        from ComposeVis.model import Disk, shifted, stretched
        expected = shifted(stretched(Disk(), 20.0, 20.0), 3.0, -2.0).visibility_point(u, v)
        np.testing.assert_allclose(m.visibility_point(u, v), expected)

    def test_no_placement(self):
        assert isinstance(build_model({'type': 'point'}), type(build_model({'type': 'delta'})))

    def test_constructor_parameters(self):
        m = build_model({'type': 'mring', 'alpha': [0.1, 0.2], 'beta': [0.0, -0.1], 'size_x': 10.0})
        assert isinstance(m, StretchedModel)
        assert (m.alpha, m.beta) == (10.0, 1.0)
        assert isinstance(m.model, MRing)
        assert m.model.alpha == (0.1, 0.2)

    def test_missing_required_parameter(self):
        with pytest.raises(ConfigurationError):
            build_model({'type': 'crescent', 'radius_outer': 1.0})

    def test_unknown_parameter(self):
        with pytest.raises(ConfigurationError):
            build_model({'type': 'gaussian', 'p0': 1.0})

    def test_unknown_type(self):
        with pytest.raises(ConfigurationError):
            build_model({'type': 'a10'})
        with pytest.raises(ConfigurationError):
            build_model({'size': 1.0})


class TestBuildComposite:

    def test_add(self):
        m = build_composite([{'type': 'ring', 'diameter': 40.0, 'flux': 0.5},
                             {'type': 'gaussian', 'fwhm': 20.0, 'x0': 10.0, 'flux': 0.5}])
        assert isinstance(m, AddModel)
        np.testing.assert_allclose(m.flux(), 1.0)

    def test_convolve(self):
        m = build_composite([{'type': 'ring', 'diameter': 40.0}, {'type': 'gaussian', 'sigma': 2.0}],
                            combine='convolve')
        assert isinstance(m, ConvolvedModel)
        assert not m.imanalytic

    def test_single_record(self):
        assert isinstance(build_composite([{'type': 'disk', 'size': 2.0}]), StretchedModel)

    def test_bad_combine(self):
        with pytest.raises(ConfigurationError):
            build_composite([{'type': 'disk'}, {'type': 'ring'}], combine='multiply')
        with pytest.raises(ConfigurationError):
            build_composite([])
