"""Domain business components wired to the generated contexts."""

from appforge.generators.nextjs.contexts import DomainTemplate

ADD_TO_CART_BUTTON = """'use client';

import React from 'react';
import { useCart, CartItem } from '../../contexts/CartContext';

export default function AddToCartButton({ product }: { product: Omit<CartItem, 'quantity'> }) {
  const { addItem } = useCart();

  return (
    <button
      onClick={() => addItem({ ...product, quantity: 1 })}
      className="w-full rounded-lg bg-black px-4 py-2 text-white transition-colors hover:bg-gray-800"
    >
      Add to cart
    </button>
  );
}
"""

PRODUCT_GRID = """'use client';

import React from 'react';
import AddToCartButton from './AddToCartButton';

export interface Product {
  id: string;
  name: string;
  price: number;
  image?: string;
}

export default function ProductGrid({ products }: { products: Product[] }) {
  if (products.length === 0) {
    return <p className="py-12 text-center text-gray-500">No products found.</p>;
  }

  return (
    <div className="grid gap-6 sm:grid-cols-2 lg:grid-cols-3">
      {products.map((product) => (
        <div key={product.id} className="overflow-hidden rounded-xl bg-white shadow-md">
          {product.image && (
            <img src={product.image} alt={product.name} className="h-56 w-full object-cover" />
          )}
          <div className="space-y-3 p-4">
            <h3 className="font-semibold">{product.name}</h3>
            <p className="text-gray-600">${product.price.toFixed(2)}</p>
            <AddToCartButton product={product} />
          </div>
        </div>
      ))}
    </div>
  );
}
"""

CART_SIDEBAR = """'use client';

import React from 'react';
import { useCart } from '../../contexts/CartContext';

export default function CartSidebar() {
  const { items, isOpen, total, toggleCart, removeItem } = useCart();

  if (!isOpen) {
    return null;
  }

  return (
    <aside className="fixed inset-y-0 right-0 z-50 w-80 bg-white p-6 shadow-2xl">
      <div className="mb-6 flex items-center justify-between">
        <h2 className="text-lg font-bold">Your cart</h2>
        <button onClick={toggleCart} className="text-gray-500 hover:text-black">
          Close
        </button>
      </div>
      <ul className="space-y-4">
        {items.map((item) => (
          <li key={item.id} className="flex items-center justify-between">
            <span>
              {item.name} x {item.quantity}
            </span>
            <button onClick={() => removeItem(item.id)} className="text-sm text-red-500">
              Remove
            </button>
          </li>
        ))}
      </ul>
      <p className="mt-6 font-semibold">Total: ${total.toFixed(2)}</p>
    </aside>
  );
}
"""

SEARCH_BAR = """'use client';

import React, { useState } from 'react';

export default function SearchBar({ onSearch }: { onSearch: (query: string) => void }) {
  const [query, setQuery] = useState('');

  return (
    <form
      onSubmit={(event) => {
        event.preventDefault();
        onSearch(query.trim());
      }}
      className="flex gap-2"
    >
      <input
        value={query}
        onChange={(event) => setQuery(event.target.value)}
        placeholder="Search products"
        className="flex-1 rounded-lg border border-gray-300 px-4 py-2"
      />
      <button type="submit" className="rounded-lg bg-black px-4 py-2 text-white">
        Search
      </button>
    </form>
  );
}
"""

USAGE_INDICATOR = """'use client';

import React from 'react';
import { useSubscription } from '../../contexts/SubscriptionContext';

export default function UsageIndicator() {
  const { value } = useSubscription();
  const percent = value.limit > 0 ? Math.min(100, Math.round((value.usage / value.limit) * 100)) : 0;

  return (
    <div className="rounded-xl bg-white p-4 shadow-sm">
      <div className="mb-2 flex justify-between text-sm text-gray-600">
        <span>Usage</span>
        <span>
          {value.usage} / {value.limit}
        </span>
      </div>
      <div className="h-2 rounded-full bg-gray-200">
        <div className="h-2 rounded-full bg-blue-600" style={{ width: `${percent}%` }} />
      </div>
    </div>
  );
}
"""

PLAN_CARD = """'use client';

import React from 'react';
import { useSubscription } from '../../contexts/SubscriptionContext';

export interface Plan {
  id: 'free' | 'pro' | 'enterprise';
  name: string;
  price: number;
  features: string[];
}

export default function PlanCard({ plan }: { plan: Plan }) {
  const { value, update } = useSubscription();
  const current = value.plan === plan.id;

  return (
    <div className={`rounded-2xl border p-6 ${current ? 'border-blue-600' : 'border-gray-200'}`}>
      <h3 className="text-xl font-bold">{plan.name}</h3>
      <p className="my-4 text-3xl font-bold">${plan.price}/mo</p>
      <ul className="mb-6 space-y-2 text-gray-600">
        {plan.features.map((feature) => (
          <li key={feature}>{feature}</li>
        ))}
      </ul>
      <button
        disabled={current}
        onClick={() => update({ plan: plan.id })}
        className="w-full rounded-lg bg-blue-600 py-2 text-white disabled:opacity-50"
      >
        {current ? 'Current plan' : 'Choose plan'}
      </button>
    </div>
  );
}
"""

THEME_TOGGLE = """'use client';

import React from 'react';
import { useTheme } from '../../contexts/ThemeContext';

export default function ThemeToggle() {
  const { theme, toggleTheme } = useTheme();

  return (
    <button
      onClick={toggleTheme}
      aria-label="Toggle theme"
      className="rounded-full border border-gray-300 px-4 py-2 text-sm"
    >
      {theme === 'light' ? 'Dark mode' : 'Light mode'}
    </button>
  );
}
"""

CONTACT_FORM = """'use client';

import React, { useState } from 'react';

export default function ContactForm() {
  const [sent, setSent] = useState(false);
  const [form, setForm] = useState({ name: '', email: '', message: '' });

  if (sent) {
    return <p className="text-green-600">Thanks, your message has been sent.</p>;
  }

  return (
    <form
      onSubmit={(event) => {
        event.preventDefault();
        setSent(true);
      }}
      className="space-y-4"
    >
      <input
        required
        value={form.name}
        onChange={(event) => setForm({ ...form, name: event.target.value })}
        placeholder="Name"
        className="w-full rounded-lg border px-4 py-2"
      />
      <input
        required
        type="email"
        value={form.email}
        onChange={(event) => setForm({ ...form, email: event.target.value })}
        placeholder="Email"
        className="w-full rounded-lg border px-4 py-2"
      />
      <textarea
        required
        value={form.message}
        onChange={(event) => setForm({ ...form, message: event.target.value })}
        placeholder="Message"
        className="h-32 w-full rounded-lg border px-4 py-2"
      />
      <button type="submit" className="rounded-lg bg-black px-6 py-2 text-white">
        Send
      </button>
    </form>
  );
}
"""

DOMAIN_COMPONENTS: dict[str, list[DomainTemplate]] = {
    "ecommerce": [
        DomainTemplate("AddToCartButton", "components/business/AddToCartButton.tsx", ADD_TO_CART_BUTTON),
        DomainTemplate("ProductGrid", "components/business/ProductGrid.tsx", PRODUCT_GRID),
        DomainTemplate("CartSidebar", "components/business/CartSidebar.tsx", CART_SIDEBAR),
        DomainTemplate("SearchBar", "components/business/SearchBar.tsx", SEARCH_BAR),
    ],
    "saas": [
        DomainTemplate("UsageIndicator", "components/business/UsageIndicator.tsx", USAGE_INDICATOR),
        DomainTemplate("PlanCard", "components/business/PlanCard.tsx", PLAN_CARD),
    ],
    "portfolio": [
        DomainTemplate("ThemeToggle", "components/business/ThemeToggle.tsx", THEME_TOGGLE),
        DomainTemplate("ContactForm", "components/business/ContactForm.tsx", CONTACT_FORM),
    ],
    "blog": [],
}


def business_components_for(domain: str) -> list[DomainTemplate]:
    return DOMAIN_COMPONENTS.get(domain, [])


def business_index(templates: list[DomainTemplate]) -> DomainTemplate:
    """Barrel file re-exporting every business component."""
    lines = [
        f"export {{ default as {t.name} }} from './{t.name}';" for t in templates
    ]
    return DomainTemplate("BusinessIndex", "components/business/index.ts", "\n".join(lines) + "\n")
