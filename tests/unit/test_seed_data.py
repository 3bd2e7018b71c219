from __future__ import annotations


def test_city_slugs_are_unique_and_url_safe() -> None:
    from stuhouses.seeds.cities import CITY_SPECS
    from stuhouses.slugs import is_slug

    slugs = [spec.slug for spec in CITY_SPECS]
    assert len(CITY_SPECS) == 10
    assert len(set(slugs)) == len(slugs)
    assert all(is_slug(s) for s in slugs)


def test_university_cities_are_seeded_cities() -> None:
    from stuhouses.seeds.cities import CITY_SPECS
    from stuhouses.seeds.universities import UNIVERSITY_SPECS

    city_slugs = {spec.slug for spec in CITY_SPECS}
    assert {spec.city_slug for spec in UNIVERSITY_SPECS} <= city_slugs


def test_property_features_exist_in_feature_vocabulary() -> None:
    from stuhouses.seeds.additional_properties import BASE_FEATURES, OPTIONAL_FEATURES
    from stuhouses.seeds.features import FEATURES
    from stuhouses.seeds.properties import PROPERTY_SPECS

    names = {name for name, _, _ in FEATURES}
    assert len(names) == len(FEATURES)
    for spec in PROPERTY_SPECS:
        assert set(spec.features) <= names
    assert set(BASE_FEATURES) <= names
    assert set(OPTIONAL_FEATURES) <= names


def test_additional_property_ids_do_not_overlap_base_seed() -> None:
    from stuhouses.seeds.additional_properties import ADDITIONAL_PROPERTY_SPECS
    from stuhouses.seeds.properties import PROPERTY_SPECS

    base_ids = {spec.id for spec in PROPERTY_SPECS}
    base_slugs = {spec.slug for spec in PROPERTY_SPECS}
    assert base_ids.isdisjoint(spec.id for spec in ADDITIONAL_PROPERTY_SPECS)
    assert base_slugs.isdisjoint(spec.slug for spec in ADDITIONAL_PROPERTY_SPECS)


def test_pick_features_is_deterministic() -> None:
    from stuhouses.seeds.additional_properties import BASE_FEATURES, OPTIONAL_FEATURES, pick_features

    available = set(BASE_FEATURES) | set(OPTIONAL_FEATURES)
    first = pick_features("faraday-road", 1337, available)
    assert first == pick_features("faraday-road", 1337, available)
    assert first[: len(BASE_FEATURES)] == list(BASE_FEATURES)
    assert len(set(first)) == len(first)


def test_pick_features_skips_optional_features_not_available() -> None:
    from stuhouses.seeds.additional_properties import BASE_FEATURES, pick_features

    assert pick_features("faraday-road", 1337, set(BASE_FEATURES)) == list(BASE_FEATURES)
