"""Prompt templates for the predictive analysis endpoints."""

MUSIC_SUMMARY_TEMPLATE = """
MUSIC DATA ANALYSIS - TOP {limit} PERFORMING TRACKS

=== SPOTIFY AFRO TRACKS ANALYSIS ===
Total Tracks: {afro_count}
Top Artists: {afro_artists}
Average Popularity: {avg_popularity:.2f}
Average Energy: {avg_energy:.3f}
Average Danceability: {avg_danceability:.3f}
Average Tempo: {avg_tempo:.1f} BPM

Top 10 Most Popular Afro Tracks:
{afro_lines}

=== YOUTUBE TRACKS ANALYSIS ===
Total Tracks: {youtube_count}
Top Artists: {youtube_artists}
Total Views: {total_views}
Total Streams: {total_streams}

Top 10 Most Viewed YouTube Tracks:
{youtube_lines}

=== AUDIO FEATURES TRENDS ===
Energy Level: {energy_label} ({avg_energy:.3f})
Danceability: {danceability_label} ({avg_danceability:.3f})
Tempo Range: {avg_tempo:.1f} BPM ({tempo_label})

=== RELEASE PATTERNS ===
Recent Releases: {recent_releases} tracks from 2020+
"""

TREND_ANALYSIS_TEMPLATE = """
{summary}

As a music industry expert and data analyst, please analyze this data and provide detailed insights in the following format:

## TOP GENRES PREDICTION
Based on the audio features, artist patterns, and popularity metrics, identify and rank the top 5-7 genres that are trending or will trend.

## EMERGING ARTISTS ANALYSIS
Identify 5-8 artists who show strong potential based on their track performance, engagement metrics, and growth patterns.

## POPULAR EVENTS & CONCERT TRENDS
Suggest 5-7 types of events, concert formats, or festival themes that would be successful based on this data.

## MARKET TRENDS & INSIGHTS
Provide 5-7 key market trends, consumer preferences, and industry directions based on the audio features and performance metrics.

## MARKETING SUGGESTIONS
Give 5-7 specific marketing strategies and promotional ideas that would work well with these trending patterns.

## COLLABORATION IDEAS
Suggest 5-7 collaboration opportunities, cross-genre fusions, or partnership ideas based on artist and genre patterns.

## VENUE RECOMMENDATIONS
Recommend 5-7 types of venues, locations, or event formats that would be ideal for these trending musical styles.

Please be specific, actionable, and data-driven in your recommendations. Consider the high danceability ({avg_danceability:.3f}), energy levels ({avg_energy:.3f}), and tempo patterns ({avg_tempo:.1f} BPM) in your analysis.
"""

# (start header, end header) pairs used to cut the trend response into sections
TREND_SECTIONS = {
    "top_genres": ("TOP GENRES", "EMERGING ARTISTS"),
    "emerging_artists": ("EMERGING ARTISTS", "POPULAR EVENTS"),
    "popular_events": ("POPULAR EVENTS", "MARKET TRENDS"),
    "concert_trends": ("MARKET TRENDS", "MARKETING SUGGESTIONS"),
    "marketing_suggestions": ("MARKETING SUGGESTIONS", "COLLABORATION IDEAS"),
    "collaboration_ideas": ("COLLABORATION IDEAS", "VENUE RECOMMENDATIONS"),
    "venue_recommendations": ("VENUE RECOMMENDATIONS", ""),
}

ARTIST_INSIGHTS_TEMPLATE = """
ARTIST ANALYSIS: {artist}

Spotify Afro Tracks: {afro_count}
{afro_lines}

YouTube Tracks: {youtube_count}
{youtube_lines}

Analyze this artist's performance and provide insights about their market position, musical style, audience engagement, and recommendations for future success. Keep it concise but insightful.
"""

GENRE_TRENDS_TEMPLATE = """
GENRE TREND ANALYSIS

Audio Feature Profile:
- Energy: {avg_energy:.3f} ({energy_label})
- Danceability: {avg_danceability:.3f} ({danceability_label})
- Tempo: {avg_tempo:.1f} BPM ({tempo_label})
- Average Popularity: {avg_popularity:.2f}

Tracks Analyzed: {tracks_analyzed}
Active Artists: {artist_count}
Top Artists: {top_artists}

Top Performing Tracks:
{track_lines}

Based on this audio feature analysis, predict:
1. What genre or sub-genre this represents
2. Market trends for this style of music
3. Target audience demographics
4. Recommended marketing strategies
5. Future growth potential
6. Similar emerging styles to watch

Keep your analysis concise but insightful, focusing on actionable predictions.
"""

CREATOR_INSIGHTS_TEMPLATE = """
AFRISIGHT CREATOR INTELLIGENCE SYSTEM

CREATOR TYPE: {creator_type_upper}
ANALYSIS FOCUS: {focus_upper}

{context}

Based on this comprehensive data analysis, provide detailed insights for {creator_type} creators focusing on {focus}. Include:

1. Current Market Trends & Opportunities
2. Data-Driven Recommendations
3. Growth Strategies & Best Practices
4. Monetization Opportunities
5. Platform-Specific Strategies
6. Collaboration & Networking Ideas
7. Future Predictions & Emerging Trends
8. Actionable Next Steps

Focus particularly on {specific_insights}. Make recommendations specific, actionable, and backed by the data provided.
"""

MUSIC_CREATOR_CONTEXT = """
MUSIC INDUSTRY DATA:
- Total Spotify Afro Tracks: {afro_tracks}
- Total YouTube Music Videos: {youtube_tracks}
- Concert Programs: {concert_programs}

TOP PERFORMING TRACKS:
{afro_lines}

YOUTUBE TOP PERFORMERS:
{youtube_lines}"""

CONTENT_CREATOR_CONTEXT = """
CONTENT CREATION DATA:
- Total Movies Analyzed: {total_movies}
- Average Runtime: {average_runtime:.1f} minutes
- Short Content (<90min): {short} pieces
- Medium Content (90-120min): {medium} pieces
- Long Content (>120min): {long} pieces

CONTENT LENGTH ANALYSIS:
- Short-form content represents {short_share:.1f}% of total
- Optimal content length range appears to be {shortest}-{longest} minutes
- Most popular format: {dominant} content"""

BUSINESS_CREATOR_CONTEXT = """
BUSINESS & RETAIL DATA:
- Total Business Records: {total_records}
- Total Net Sales: ${total_net_sales}
- Average Net Sales: ${average_net_sales:.2f}
- Top Product Category: {top_product_type}
- Unique Product Types: {unique_product_types}

TOP PERFORMING BUSINESS CATEGORIES:
{sales_lines}

BUSINESS INSIGHTS:
- Highest performing category generates ${top_sales} in net sales
- Success rate varies by product type and market positioning"""

GENERAL_CREATOR_CONTEXT = """
COMPREHENSIVE CREATOR ECOSYSTEM DATA:
Music Industry:
- {afro_tracks} music tracks analyzed
- {concert_programs} live events tracked

Content Creation:
- {total_movies} content pieces analyzed
- Average content length: {average_runtime:.1f} minutes

Business & Commerce:
- {total_records} business cases studied
- ${total_net_sales} in total sales tracked
- {unique_product_types} different product categories

CROSS-INDUSTRY INSIGHTS:
- Music streaming shows high engagement with energetic, danceable content
- Content creation favors {content_length} formats
- Business success varies significantly across product categories"""

CREATOR_FOCUS = {
    "music": "music industry trends, artist development, streaming strategies, live performance opportunities",
    "content": "content creation strategies, optimal video lengths, audience engagement, platform-specific recommendations",
    "business": "business strategy, product development, market trends, monetization strategies",
    "general": "cross-industry trends, multi-platform strategies, audience development, monetization across different creator verticals",
}

BUSINESS_TRENDS_TEMPLATE = """
BUSINESS MARKET ANALYSIS

Overall Market Data:
- Total Businesses Analyzed: {total_records}
- Total Market Value: ${total_net_sales}
- Average Business Performance: ${average_net_sales:.2f}
- Top Performing Category: {top_product_type}
{category_block}
TOP PERFORMING BUSINESSES:
{sales_lines}

MARKET INSIGHTS:
- Success Rate Analysis across {unique_product_types} different sectors
- Performance Range: ${lowest} - ${highest}
- Market Concentration in top-performing categories

Based on this business data, provide:
1. Market opportunity analysis
2. Successful business model patterns
3. Category-specific strategies
4. Growth potential predictions
5. Risk assessment and mitigation
6. Competitive landscape insights
7. Monetization strategies
8. Scaling recommendations
"""

CONTENT_STRATEGY_TEMPLATE = """
CONTENT CREATION STRATEGY ANALYSIS

Content Portfolio Overview:
- Total Content Pieces Analyzed: {total_movies}
- Average Content Length: {average_runtime:.1f} minutes
- Runtime Range: {shortest} - {longest} minutes

Content Distribution:
- Short-Form (<90min): {short} pieces ({short_share:.1f}%)
- Medium-Form (90-120min): {medium} pieces ({medium_share:.1f}%)
- Long-Form (>120min): {long} pieces ({long_share:.1f}%)

Analysis Focus: {type_description}
Filtered Results: {results_count} content pieces

CONTENT PERFORMANCE PATTERNS:
- Most common content length: {dominant}
- Content length optimization opportunities
- Platform-specific content strategies
- Audience attention span considerations

Based on this content analysis data, provide comprehensive insights for content creators including:

1. Optimal Content Length Strategies
2. Platform-Specific Recommendations (YouTube, TikTok, Instagram, etc.)
3. Audience Engagement Optimization
4. Content Series vs. Standalone Strategy
5. Production Efficiency Tips
6. Content Distribution Strategies
7. Monetization Through Different Content Lengths
8. Trending Content Format Predictions
9. Cross-platform Content Adaptation
10. Content Creation Workflow Optimization

Focus on actionable strategies for {type_description_lower} content creation.
"""

# content type -> (min runtime, max runtime, description)
CONTENT_TYPES = {
    "short": (0, 90, "Short-Form Content (<90 minutes)"),
    "medium": (90, 120, "Medium-Form Content (90-120 minutes)"),
    "long": (120, 300, "Long-Form Content (>120 minutes)"),
}
