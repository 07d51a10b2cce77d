import json

from recipe_vision.schema import Recipe
from recipe_vision.storage import JsonFileStorage, MemoryStorage, SavedRecipeStore


def make(name, **extra):
    return Recipe(recipeName=name, ingredients=[f"{name} ingredient"], instructions=[f"cook {name}"], **extra)


def test_save_then_duplicate_then_delete(store, storage, tomato_soup):
    assert store.save(tomato_soup) is True
    assert len(store) == 1

    changed = Recipe(recipeName="Tomato Soup", ingredients=["tomato", "cream"], instructions=["simmer"])
    assert store.save(changed) is False
    assert len(store) == 1
    assert store.recipes[0] == tomato_soup

    assert store.delete(0) is True
    assert len(store) == 0
    assert json.loads(storage.get_item("savedRecipes")) == []


def test_every_mutation_writes_full_list(store, storage):
    store.save(make("Soup"))
    store.save(make("Salad"))

    stored = json.loads(storage.get_item("savedRecipes"))
    assert [r["recipeName"] for r in stored] == ["Soup", "Salad"]


def test_delete_out_of_range_is_noop(store, storage, tomato_soup):
    store.save(tomato_soup)
    before = storage.get_item("savedRecipes")

    assert store.delete(1) is False
    assert store.delete(-1) is False
    assert len(store) == 1
    assert storage.get_item("savedRecipes") == before


def test_reload_matches_in_memory_state(storage, nutrition):
    store = SavedRecipeStore(storage)
    store.load()
    for name in ["A", "B", "C", "D"]:
        store.save(make(name, servingSize="2", nutritionalInfo=nutrition))
    store.delete(1)
    store.save(make("B"))
    store.delete(0)

    reloaded = SavedRecipeStore(storage)
    reloaded.load()

    assert reloaded.recipes == store.recipes
    assert [r.recipeName for r in reloaded] == ["C", "D", "B"]
    assert reloaded.recipes[0].nutritionalInfo == nutrition


def test_load_missing_key_is_empty():
    store = SavedRecipeStore(MemoryStorage())
    assert store.load() == ()


def test_corrupt_json_is_discarded():
    storage = MemoryStorage({"savedRecipes": "{not json"})
    store = SavedRecipeStore(storage)

    assert store.load() == ()
    assert storage.get_item("savedRecipes") is None


def test_wrong_shape_is_discarded():
    storage = MemoryStorage({"savedRecipes": json.dumps([{"title": "not a recipe"}])})
    store = SavedRecipeStore(storage)

    assert store.load() == ()
    assert storage.get_item("savedRecipes") is None


def test_corruption_recovery_leaves_other_keys_alone(tmp_path):
    path = tmp_path / "storage.json"
    path.write_text(json.dumps({"savedRecipes": "[[[", "theme": "dark"}))
    storage = JsonFileStorage(path)

    SavedRecipeStore(storage).load()

    assert json.loads(path.read_text()) == {"theme": "dark"}


def test_contains_by_name(store, tomato_soup):
    assert not store.contains("Tomato Soup")
    store.save(tomato_soup)
    assert store.contains("Tomato Soup")


def test_non_utf8_storage_file_loads_empty(tmp_path):
    path = tmp_path / "storage.json"
    path.write_bytes(b'{"savedRecipes": "\xff\xfe"}')

    assert SavedRecipeStore(JsonFileStorage(path)).load() == ()


def test_storage_path_that_is_a_directory_loads_empty(tmp_path):
    assert SavedRecipeStore(JsonFileStorage(tmp_path)).load() == ()
