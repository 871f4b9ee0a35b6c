"""User-facing texts (ru-RU)."""

# Forecast status
LOADING_FORECAST = "Загрузка прогноза..."
FORECAST_LOADED = "Прогноз успешно загружен"
FORECAST_FAILED = "Ошибка загрузки прогноза: {error}"
TODAY = "Сегодня"

# Main location
CURRENT_LOCATION = "Текущее местоположение"
LOCATING = "Определяем текущее местоположение..."
GEOLOCATION_UNSUPPORTED = "Геолокация не поддерживается. Выберите город вручную."
GEOLOCATION_FAILED = "Не удалось получить геолокацию. Выберите город вручную."
NO_MAIN_CITY = "Город не выбран."
CHOOSE_MAIN_CITY = "Выберите основной город для отображения прогноза."

# Form validation
ENTER_CITY_NAME = "Введите название города."
PICK_FROM_SUGGESTIONS = "Выберите город из выпадающего списка."
CITY_ALREADY_ADDED = "Этот город уже добавлен."
CITY_IS_MAIN = "Этот город уже выбран как основной."

# Client errors
HTTP_ERROR = "Ошибка HTTP: {status}"
GEOCODING_HTTP_ERROR = "Ошибка HTTP геокодинга: {status}"
MALFORMED_RESPONSE = "Некорректный ответ сервера"
NETWORK_ERROR = "Сетевая ошибка: {error}"
UNEXPECTED_ERROR = "Непредвиденная ошибка"

# Card controls
REMOVE_CITY = "Удалить город"
