from farmcart.config import Settings


def test_allowed_origins_from_comma_separated_env(monkeypatch):
    monkeypatch.setenv("FARMCART_FRONTEND_ALLOWED_ORIGINS", "https://shop.example, https://admin.example,")

    config = Settings()

    assert config.frontend_allowed_origins == ("https://shop.example", "https://admin.example")


def test_allowed_origins_from_json_env(monkeypatch):
    monkeypatch.setenv("FARMCART_FRONTEND_ALLOWED_ORIGINS", '["https://shop.example"]')

    config = Settings()

    assert config.frontend_allowed_origins == ("https://shop.example",)


def test_allowed_origins_accept_a_list():
    config = Settings(frontend_allowed_origins=["http://localhost:3000"])

    assert config.frontend_allowed_origins == ("http://localhost:3000",)


def test_numeric_settings_from_env(monkeypatch):
    monkeypatch.setenv("FARMCART_DEFAULT_BASKET_SIZE", "4")
    monkeypatch.setenv("FARMCART_DEFAULT_TAX_RATE", "0.0725")

    config = Settings()

    assert config.default_basket_size == 4
    assert config.default_tax_rate == 0.0725
