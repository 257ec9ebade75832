"""Extended domain templates for dashboards and blogs."""

from appforge.generators.nextjs.contexts import DomainTemplate, state_context

DASHBOARD_CONTEXT = state_context(
    "Dashboard",
    "DashboardState",
    "  range: '7d' | '30d' | '90d';\n  sidebarOpen: boolean;\n  selectedWidget: string | null;",
    "{ range: '30d', sidebarOpen: true, selectedWidget: null }",
)

ANALYTICS_CONTEXT = state_context(
    "Analytics",
    "AnalyticsState",
    "  visitors: number;\n  conversions: number;\n  revenue: number;\n  series: { label: string; value: number }[];",
    "{ visitors: 0, conversions: 0, revenue: 0, series: [] }",
)

METRICS_CARD = """import React from 'react';

export interface MetricsCardProps {
  label: string;
  value: string | number;
  change?: number;
}

export default function MetricsCard({ label, value, change }: MetricsCardProps) {
  const positive = (change ?? 0) >= 0;

  return (
    <div className="rounded-xl bg-white p-6 shadow-sm">
      <p className="text-sm text-gray-500">{label}</p>
      <p className="mt-2 text-3xl font-bold">{value}</p>
      {change !== undefined && (
        <p className={positive ? 'text-green-600' : 'text-red-600'}>
          {positive ? '+' : ''}
          {change}%
        </p>
      )}
    </div>
  );
}
"""

ANALYTICS_CHART = """'use client';

import React from 'react';
import { useAnalytics } from '../../contexts/AnalyticsContext';

export default function AnalyticsChart({ height = 160 }: { height?: number }) {
  const { value } = useAnalytics();
  const max = Math.max(1, ...value.series.map((point) => point.value));

  if (value.series.length === 0) {
    return <p className="text-sm text-gray-500">No data for this period.</p>;
  }

  return (
    <div className="flex items-end gap-2" style={{ height }}>
      {value.series.map((point) => (
        <div key={point.label} className="flex flex-1 flex-col items-center gap-1">
          <div
            className="w-full rounded-t bg-blue-500"
            style={{ height: `${(point.value / max) * 100}%` }}
          />
          <span className="text-xs text-gray-500">{point.label}</span>
        </div>
      ))}
    </div>
  );
}
"""

BLOG_CONTEXT = """'use client';

import React, { createContext, useContext, useMemo, useState, ReactNode } from 'react';

export interface Post {
  slug: string;
  title: string;
  excerpt: string;
  body: string;
  tags: string[];
  publishedAt: string;
}

interface BlogContextValue {
  posts: Post[];
  tag: string | null;
  visiblePosts: Post[];
  setTag: (tag: string | null) => void;
  setPosts: (posts: Post[]) => void;
}

const BlogContext = createContext<BlogContextValue | undefined>(undefined);

export function BlogProvider({ children, initialPosts = [] }: { children: ReactNode; initialPosts?: Post[] }) {
  const [posts, setPosts] = useState<Post[]>(initialPosts);
  const [tag, setTag] = useState<string | null>(null);

  const visiblePosts = useMemo(
    () => (tag ? posts.filter((post) => post.tags.includes(tag)) : posts),
    [posts, tag]
  );

  return (
    <BlogContext.Provider value={{ posts, tag, visiblePosts, setTag, setPosts }}>
      {children}
    </BlogContext.Provider>
  );
}

export function useBlog() {
  const context = useContext(BlogContext);
  if (!context) {
    throw new Error('useBlog must be used within a BlogProvider');
  }
  return context;
}
"""

BLOG_POST = """import React from 'react';
import type { Post } from '../../contexts/BlogContext';

export default function BlogPost({ post }: { post: Post }) {
  return (
    <article className="prose mx-auto max-w-3xl py-12">
      <p className="text-sm text-gray-500">{new Date(post.publishedAt).toLocaleDateString()}</p>
      <h1>{post.title}</h1>
      <div className="mb-8 flex gap-2">
        {post.tags.map((tag) => (
          <span key={tag} className="rounded-full bg-gray-100 px-3 py-1 text-xs">
            {tag}
          </span>
        ))}
      </div>
      <div>{post.body}</div>
    </article>
  );
}
"""

EXTENDED_TEMPLATES: dict[str, list[DomainTemplate]] = {
    "saas": [
        DomainTemplate("DashboardContext", "contexts/DashboardContext.tsx", DASHBOARD_CONTEXT),
        DomainTemplate("AnalyticsContext", "contexts/AnalyticsContext.tsx", ANALYTICS_CONTEXT),
        DomainTemplate("MetricsCard", "components/dashboard/MetricsCard.tsx", METRICS_CARD),
        DomainTemplate("AnalyticsChart", "components/dashboard/AnalyticsChart.tsx", ANALYTICS_CHART),
    ],
    "blog": [
        DomainTemplate("BlogContext", "contexts/BlogContext.tsx", BLOG_CONTEXT),
        DomainTemplate("BlogPost", "components/blog/BlogPost.tsx", BLOG_POST),
    ],
}


def extended_templates_for(domain: str) -> list[DomainTemplate]:
    return EXTENDED_TEMPLATES.get(domain, [])
