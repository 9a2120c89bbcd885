from decimal import Decimal

from bella_cucina import db
from bella_cucina.models import MenuItem


MENU = [
    # Pasta
    ("carbonara", "Spaghetti Carbonara", "pasta", "22.00",
     "A classic Roman pasta dish with crispy guanciale, farm-fresh eggs, aged Pecorino Romano "
     "cheese, and freshly cracked black pepper."),
    ("lasagna", "Lasagna Bolognese", "pasta", "24.00",
     "Layers of tender pasta sheets, slow-cooked Bolognese sauce, creamy bechamel, and "
     "Parmigiano-Reggiano cheese."),
    ("fettuccine-alfredo", "Fettuccine Alfredo", "pasta", "20.00",
     "Creamy fettuccine pasta with butter, heavy cream, and freshly grated Parmesan cheese."),
    # Pizza
    ("margherita", "Margherita Pizza", "pizza", "18.00",
     "Hand-stretched dough with San Marzano tomatoes, fresh mozzarella di bufala, and basil."),
    ("quattro-formaggi", "Quattro Formaggi", "pizza", "20.00",
     "Mozzarella, gorgonzola, fontina, and Parmigiano-Reggiano."),
    ("pepperoni", "Pepperoni Pizza", "pizza", "19.00",
     "Classic pizza topped with tomato sauce, mozzarella, and spicy pepperoni slices."),
    # Mains
    ("mushroom-risotto", "Mushroom Risotto", "mains", "24.00",
     "Creamy Arborio rice with porcini mushrooms, white wine, and truffle oil."),
    ("osso-buco", "Osso Buco", "mains", "32.00",
     "Tender veal shanks braised with white wine and aromatics, topped with gremolata."),
    ("chicken-parmigiana", "Chicken Parmigiana", "mains", "26.00",
     "Breaded chicken breast topped with marinara sauce and melted mozzarella cheese."),
    # Desserts
    ("tiramisu", "Tiramisu", "desserts", "12.00",
     "Espresso-soaked ladyfingers, mascarpone cream, and cocoa powder."),
    ("panna-cotta", "Panna Cotta", "desserts", "10.00",
     "Silky Italian cream dessert served with fresh berry compote."),
    ("cannoli", "Cannoli", "desserts", "11.00",
     "Crispy pastry shells filled with sweet ricotta cream and chocolate chips."),
]


def seed_menu():
    db.init_db()

    session = db.SessionLocal()
    try:
        existing = session.query(MenuItem).count()
        if existing > 0:
            print(f"Menu already has {existing} items. Not seeding again.")
            return

        for item_id, name, category, price, description in MENU:
            session.add(MenuItem(
                id=item_id,
                name=name,
                category=category,
                price=Decimal(price),
                description=description,
                is_available=True,
            ))

        session.commit()
        print(f"Seeded {len(MENU)} menu items.")
    finally:
        session.close()


if __name__ == "__main__":
    seed_menu()
