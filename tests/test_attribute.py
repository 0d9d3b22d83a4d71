from pulsarlang.attribute import Attribute, Attributes


def test_empty_has_nothing():
    assert not Attributes().has(Attribute.GENERATED)


def test_add_then_has():
    attrs = Attributes()
    attrs.add(Attribute.GENERATED)
    assert attrs.has(Attribute.GENERATED)


def test_add_is_idempotent():
    once = Attributes()
    once.add(Attribute.GENERATED)
    twice = Attributes()
    twice.add(Attribute.GENERATED)
    twice.add(Attribute.GENERATED)
    assert once == twice


def test_with_attribute_leaves_original():
    base = Attributes()
    extended = base.with_attribute(Attribute.GENERATED)
    assert extended.has(Attribute.GENERATED)
    assert not base.has(Attribute.GENERATED)
    assert base == Attributes()


def test_from_iterable_matches_add():
    built = Attributes()
    built.add(Attribute.GENERATED)
    assert Attributes.from_iterable([Attribute.GENERATED]) == built
    assert Attributes.from_iterable([]) == Attributes()