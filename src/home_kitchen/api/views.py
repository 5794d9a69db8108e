"""Stateless HTML renderers for the storefront and admin panel."""

from html import escape

from home_kitchen.domain.cart import Cart
from home_kitchen.domain.checkout import CheckoutState
from home_kitchen.domain.menu import ALL_CATEGORIES, Category, Dish, format_price

MENU_FILTERS = [ALL_CATEGORIES, *[category.value for category in Category]]


def render_menu_grid(dishes: list[Dish], active_category: str | None) -> str:
    """Render category filters and the cards of orderable dishes."""
    active = active_category or ALL_CATEGORIES
    filters = "".join(
        f'<button class="filter{" active" if name == active else ""}" '
        f'data-category="{escape(name)}">{escape(name)}</button>'
        for name in MENU_FILTERS
    )
    cards = "".join(_dish_card(dish) for dish in dishes)
    if not dishes:
        cards = '<p class="empty">Страв у цій категорії поки немає</p>'
    return (
        '<section class="menu">'
        "<h2>НАШЕ <span>МЕНЮ</span></h2>"
        f'<div class="filters">{filters}</div>'
        f'<div class="grid">{cards}</div>'
        "</section>"
    )


def _dish_card(dish: Dish) -> str:
    return (
        f'<article class="card" data-dish-id="{escape(dish.id)}">'
        f'<img src="{escape(dish.image_url)}" alt="{escape(dish.name)}" />'
        f'<span class="price">{format_price(dish.price)}</span>'
        f"<h3>{escape(dish.name)}</h3>"
        f"<p>{escape(dish.description)}</p>"
        f'<button class="add" data-dish-id="{escape(dish.id)}">+ До кошика</button>'
        "</article>"
    )


def render_cart_drawer(cart: Cart, state: CheckoutState) -> str:
    """Render the cart drawer: empty notice, line list or checkout form."""
    badge = f'<span class="badge">{cart.item_count()}</span>' if cart.lines else ""
    header = f"<header><h2>КОШИК</h2>{badge}</header>"
    if cart.is_empty():
        return f'{header}<div class="empty">Кошик порожній</div>'
    if state is CheckoutState.CHECKING_OUT:
        return header + render_checkout_form(cart.total())
    lines = "".join(
        f'<div class="line" data-dish-id="{escape(line.dish_id)}">'
        f'<img src="{escape(line.dish.image_url)}" alt="{escape(line.dish.name)}" />'
        f"<div><h3>{escape(line.dish.name)}</h3>"
        f"<p>{format_price(line.dish.price)}</p>"
        f'<button class="qty" data-delta="-1">-</button>'
        f"<span>{line.quantity}</span>"
        f'<button class="qty" data-delta="1">+</button></div>'
        f'<button class="remove">&times;</button>'
        "</div>"
        for line in cart.lines
    )
    return (
        f'{header}<div class="lines">{lines}</div>'
        f'<footer><span>Разом:</span><strong>{format_price(cart.total())}</strong>'
        '<button id="checkout-start">ОФОРМИТИ ЗАМОВЛЕННЯ</button></footer>'
    )


def render_checkout_form(total: float) -> str:
    """Render the contact form shown while checking out."""
    return (
        '<form id="checkout-form">'
        "<h3>ОФОРМЛЕННЯ</h3>"
        "<label>Ім'я<input name=\"name\" required /></label>"
        '<label>Телефон<input name="phone" type="tel" placeholder="+380..." '
        "required /></label>"
        '<label>Адреса доставки<textarea name="address" required></textarea></label>'
        f"<p>До сплати: <strong>{format_price(total)}</strong></p>"
        '<button type="submit">ПІДТВЕРДИТИ ЗАМОВЛЕННЯ</button>'
        '<button type="button" id="checkout-cancel">Повернутись до кошика</button>'
        "</form>"
    )


def render_admin_dishes(dishes: tuple[Dish, ...]) -> str:
    """Render the admin list of every dish, available or not."""
    rows = "".join(
        f'<div class="row" data-dish-id="{escape(dish.id)}" '
        f'data-available="{"true" if dish.is_available else "false"}">'
        f'<img src="{escape(dish.image_url)}" alt="{escape(dish.name)}" />'
        f"<div><h3>{escape(dish.name)} <small>{escape(dish.category)}</small></h3>"
        f"<p>{escape(dish.description)}</p>"
        f"<p>{format_price(dish.price)}</p></div>"
        f'<button class="toggle" title="'
        f'{"В наявності" if dish.is_available else "Немає в наявності"}">'
        f'{"✓" if dish.is_available else "✗"}</button>'
        '<button class="delete">Видалити</button>'
        "</div>"
        for dish in dishes
    )
    return f"<h2>АКТИВНЕ МЕНЮ ({len(dishes)})</h2>{rows}"


def render_login_form(error: str | None = None) -> str:
    """Render the admin sign-in form."""
    error_html = f'<p class="error">{escape(error)}</p>' if error else ""
    return (
        '<form id="login-form">'
        "<h2>ВХІД АДМІНІСТРАТОРА</h2>"
        '<label>Email<input name="email" type="email" required /></label>'
        '<label>Пароль<input name="password" type="password" required /></label>'
        f"{error_html}"
        '<button type="submit">УВІЙТИ В ПАНЕЛЬ</button>'
        "</form>"
    )


def render_dish_form() -> str:
    """Render the new dish form."""
    options = "".join(
        f'<option value="{escape(category.value)}">{escape(category.value)}</option>'
        for category in Category
    )
    return (
        '<form id="dish-form">'
        "<h2>ДОДАТИ СТРАВУ</h2>"
        '<input name="name" placeholder="Назва страви" required />'
        '<textarea name="description" placeholder="Опис" required></textarea>'
        '<input name="price" type="number" min="0" placeholder="Ціна (₴)" required />'
        f'<select name="category">{options}</select>'
        '<label>Фото страви<input name="image" type="file" accept="image/*" /></label>'
        '<button type="submit">ЗБЕРЕГТИ СТРАВУ</button>'
        "</form>"
    )


_HIGHLIGHTS = (
    ("ШВИДКО", "Доставка до 45 хвилин у будь-яку точку міста"),
    ("ЛОКАЛЬНО", "Використовуємо лише фермерські продукти України"),
    ("ПІДТРИМКА", "Цілодобовий зв'язок з нашими кібер-кур'єрами"),
)


def render_hero() -> str:
    return (
        '<section class="hero">'
        '<h1><span class="accent">КІБЕР</span> СМАК</h1>'
        "<p>Автентична українська кухня у сучасному виконанні.<br />"
        "Швидка доставка. Гарячі страви. Потужні емоції.</p>"
        '<a class="cta" href="#menu">ЗАМОВИТИ ЗАРАЗ</a>'
        '<a class="cta outline" href="#menu">ПЕРЕГЛЯНУТИ МЕНЮ</a>'
        "</section>"
    )


def render_info_section() -> str:
    items = "".join(
        f"<div><h4>{escape(title)}</h4><p>{escape(text)}</p></div>"
        for title, text in _HIGHLIGHTS
    )
    return f'<section class="info">{items}</section>'


_STYLE = """
      body { font-family: ui-sans-serif, system-ui, sans-serif; margin: 0;
             background: #121212; color: #fff; }
      nav { display: flex; justify-content: space-between; padding: 1rem 1.5rem;
            border-bottom: 1px solid #333; }
      nav a { color: #39ff14; font-weight: 900; text-decoration: none; }
      main { display: grid; grid-template-columns: 1fr 360px; gap: 2rem;
             padding: 2rem; }
      .grid { display: grid; grid-template-columns: repeat(auto-fill, 260px);
              gap: 1.5rem; }
      .card, .row, .line { background: #1a1a1a; border: 1px solid #333;
                           padding: 1rem; }
      img { max-width: 100%; }
      .price, strong { color: #39ff14; font-weight: 900; }
      .filter.active { background: #39ff14; color: #000; }
      button { padding: 0.4rem 0.8rem; margin: 0.2rem; cursor: pointer; }
      input, textarea, select { display: block; width: 100%;
                                margin-bottom: 0.6rem; }
      .error { color: #ff4d4d; }
      .hero, .info, body > footer { text-align: center; padding: 4rem 1.5rem; }
      .hero h1 { font-size: 4rem; font-weight: 900; margin: 0 0 1rem; }
      .accent { color: #39ff14; }
      .cta { display: inline-block; margin: 0.5rem; padding: 1rem 2rem;
             background: #39ff14; color: #000; font-weight: 900;
             text-decoration: none; }
      .cta.outline { background: none; color: #ff007f;
                     border: 2px solid #ff007f; }
      .info { display: grid; grid-template-columns: repeat(3, 1fr);
              border-top: 1px solid #333; border-bottom: 1px solid #333; }
      .info p, body > footer p { color: #888; font-size: 0.85rem; }
"""

STOREFRONT_HTML = f"""<!doctype html>
<html lang="uk">
  <head>
    <meta charset="utf-8" />
    <meta name="viewport" content="width=device-width, initial-scale=1" />
    <title>Home Kitchen</title>
    <style>{_STYLE}</style>
  </head>
  <body>
    <nav><a href="/">HOME KITCHEN</a><a href="/admin/ui">Увійти</a></nav>
    {render_hero()}
    <main>
      <div id="menu">Завантаження...</div>
      <aside id="cart"></aside>
    </main>
    {render_info_section()}
    <footer>
      <div class="accent"><strong>HOME KITCHEN</strong></div>
      <p>© 2025 Домашня Кухня. Made for Cyber-Ukraine.</p>
    </footer>
    <script>
      let category = 'Усі';
      let menuVersion = -1;

      async function call(method, path, body) {{
        const res = await fetch(path, {{
          method,
          headers: {{ 'Content-Type': 'application/json' }},
          body: body === undefined ? undefined : JSON.stringify(body),
        }});
        if (!res.ok) {{
          const data = await res.json().catch(() => ({{}}));
          alert(data.detail || ('Error: ' + res.status));
        }}
        return res;
      }}

      async function loadMenu() {{
        const res = await fetch('/fragments/menu?category=' +
          encodeURIComponent(category));
        document.getElementById('menu').innerHTML = await res.text();
      }}

      async function loadCart() {{
        const res = await fetch('/fragments/cart');
        document.getElementById('cart').innerHTML = await res.text();
      }}

      async function pollMenu() {{
        const res = await fetch('/api/menu/version');
        const data = await res.json();
        if (data.version !== menuVersion) {{
          menuVersion = data.version;
          await loadMenu();
        }}
      }}

      document.addEventListener('click', async (event) => {{
        const target = event.target;
        if (target.classList.contains('filter')) {{
          category = target.dataset.category;
          await loadMenu();
        }} else if (target.classList.contains('add')) {{
          await call('POST', '/api/cart/items', {{ dish_id: target.dataset.dishId }});
          await loadCart();
        }} else if (target.classList.contains('qty')) {{
          const id = target.closest('.line').dataset.dishId;
          await call('PATCH', '/api/cart/items/' + encodeURIComponent(id),
            {{ delta: Number(target.dataset.delta) }});
          await loadCart();
        }} else if (target.classList.contains('remove')) {{
          const id = target.closest('.line').dataset.dishId;
          await call('DELETE', '/api/cart/items/' + encodeURIComponent(id));
          await loadCart();
        }} else if (target.id === 'checkout-start') {{
          await call('POST', '/api/checkout/start');
          await loadCart();
        }} else if (target.id === 'checkout-cancel') {{
          await call('POST', '/api/checkout/cancel');
          await loadCart();
        }}
      }});

      document.addEventListener('submit', async (event) => {{
        if (event.target.id !== 'checkout-form') return;
        event.preventDefault();
        const form = new FormData(event.target);
        const res = await call('POST', '/api/checkout/submit', {{
          name: form.get('name'),
          phone: form.get('phone'),
          address: form.get('address'),
        }});
        if (res.ok) {{
          const data = await res.json();
          alert(data.message);
        }}
        await loadCart();
      }});

      loadCart();
      pollMenu();
      setInterval(pollMenu, 3000);
    </script>
  </body>
</html>
"""

ADMIN_HTML = f"""<!doctype html>
<html lang="uk">
  <head>
    <meta charset="utf-8" />
    <meta name="viewport" content="width=device-width, initial-scale=1" />
    <title>Home Kitchen Admin</title>
    <style>{_STYLE}</style>
  </head>
  <body>
    <nav><a href="/">HOME KITCHEN</a><button id="logout" hidden>Вийти</button></nav>
    <main>
      <div id="dishes"></div>
      <aside id="side">{render_login_form()}</aside>
    </main>
    <script>
      let token = sessionStorage.getItem('adminToken');

      function authHeaders() {{
        return {{
          'Content-Type': 'application/json',
          'Authorization': 'Bearer ' + token,
        }};
      }}

      async function loadDishes() {{
        const res = await fetch('/admin/fragments/dishes', {{
          headers: authHeaders(),
        }});
        if (res.status === 401) {{
          token = null;
          sessionStorage.removeItem('adminToken');
          return showLogin();
        }}
        document.getElementById('dishes').innerHTML = await res.text();
      }}

      function showLogin(error) {{
        document.getElementById('logout').hidden = true;
        document.getElementById('dishes').innerHTML = '';
        document.getElementById('side').innerHTML = `{render_login_form()}`;
        if (error) {{
          const p = document.createElement('p');
          p.className = 'error';
          p.textContent = error;
          document.getElementById('login-form').appendChild(p);
        }}
      }}

      function showPanel() {{
        document.getElementById('logout').hidden = false;
        document.getElementById('side').innerHTML = `{render_dish_form()}`;
        loadDishes();
      }}

      function readFile(file) {{
        return new Promise((resolve, reject) => {{
          const reader = new FileReader();
          reader.onload = () => resolve(reader.result.split(',')[1]);
          reader.onerror = reject;
          reader.readAsDataURL(file);
        }});
      }}

      document.addEventListener('submit', async (event) => {{
        event.preventDefault();
        const form = new FormData(event.target);
        if (event.target.id === 'login-form') {{
          const res = await fetch('/admin/login', {{
            method: 'POST',
            headers: {{ 'Content-Type': 'application/json' }},
            body: JSON.stringify({{
              email: form.get('email'), password: form.get('password'),
            }}),
          }});
          const data = await res.json();
          if (!res.ok) return showLogin(data.detail);
          token = data.access_token;
          sessionStorage.setItem('adminToken', token);
          return showPanel();
        }}
        if (event.target.id === 'dish-form') {{
          const file = form.get('image');
          if (!file || !file.size) return alert('Будь ласка, оберіть фото страви');
          const button = event.target.querySelector('button[type=submit]');
          button.disabled = true;
          button.textContent = 'ЗАВАНТАЖЕННЯ...';
          const res = await fetch('/admin/dishes', {{
            method: 'POST',
            headers: authHeaders(),
            body: JSON.stringify({{
              name: form.get('name'),
              description: form.get('description'),
              price: Number(form.get('price')),
              category: form.get('category'),
              image: {{
                filename: file.name,
                content_type: file.type || 'application/octet-stream',
                data_base64: await readFile(file),
              }},
            }}),
          }});
          const data = await res.json();
          button.disabled = false;
          button.textContent = 'ЗБЕРЕГТИ СТРАВУ';
          if (!res.ok) return alert(data.detail);
          event.target.reset();
          alert('Страву додано успішно!');
          setTimeout(loadDishes, 500);
        }}
      }});

      document.addEventListener('click', async (event) => {{
        const target = event.target;
        const row = target.closest('.row');
        if (target.id === 'logout') {{
          await fetch('/admin/logout', {{ method: 'POST', headers: authHeaders() }});
          token = null;
          sessionStorage.removeItem('adminToken');
          return showLogin();
        }}
        if (!row) return;
        const id = encodeURIComponent(row.dataset.dishId);
        let res;
        if (target.classList.contains('toggle')) {{
          res = await fetch('/admin/dishes/' + id + '/availability', {{
            method: 'POST',
            headers: authHeaders(),
            body: JSON.stringify({{ current: row.dataset.available === 'true' }}),
          }});
        }} else if (target.classList.contains('delete')) {{
          const confirmed = confirm('Видалити цю страву?');
          res = await fetch('/admin/dishes/' + id + '?confirmed=' + confirmed, {{
            method: 'DELETE',
            headers: authHeaders(),
          }});
        }} else {{
          return;
        }}
        if (!res.ok) {{
          const data = await res.json().catch(() => ({{}}));
          alert(data.detail || ('Error: ' + res.status));
        }}
        setTimeout(loadDishes, 500);
      }});

      if (token) {{
        showPanel();
      }}
    </script>
  </body>
</html>
"""
